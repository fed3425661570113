from .frame_catalog import FrameCatalog

__all__ = ["FrameCatalog"]
