"""Domain entities package."""
from .analysis import AnalysisRecord, FacialAttributes, TryOnResult
from .frame import FrameProduct, NewFrame
from .vocabulary import FaceShape, FrameColor, FrameSize, FrameStyle, StockStatus

__all__ = [
    "AnalysisRecord",
    "FacialAttributes",
    "TryOnResult",
    "FrameProduct",
    "NewFrame",
    "FaceShape",
    "FrameColor",
    "FrameSize",
    "FrameStyle",
    "StockStatus",
]
