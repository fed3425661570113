"""Database infrastructure package."""
from .repositories import AnalysisRepository, FrameRepository
from .unit_of_work import UnitOfWork

__all__ = ["AnalysisRepository", "FrameRepository", "UnitOfWork"]
