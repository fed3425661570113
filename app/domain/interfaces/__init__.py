"""Service interfaces package."""
from .catalog import FrameCatalog
from .extraction import AttributeExtractor, ImageFetcher

__all__ = ["AttributeExtractor", "FrameCatalog", "ImageFetcher"]
