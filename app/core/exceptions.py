"""Custom exceptions for the frame finder service."""
from typing import Optional


class FrameFinderError(Exception):
    """Base exception for frame finder operations."""

    def __init__(self, message: str, details: Optional[dict] = None):
        """
        Initialize frame finder error.

        Args:
            message: Error description
            details: Additional error context
        """
        super().__init__(message)
        self.details = details or {}


class InvalidLimitError(FrameFinderError):
    """Raised when a match limit is not a positive integer."""
    pass


class InvalidImageError(FrameFinderError):
    """Raised when the provided image is invalid or cannot be processed."""
    pass


class ImageTooLargeError(FrameFinderError):
    """Raised when the uploaded image exceeds the maximum allowed size."""
    pass


class AttributeExtractionError(FrameFinderError):
    """Raised when facial attributes could not be extracted and no fallback applies."""
    pass


class FrameImageError(FrameFinderError):
    """Raised when a frame product image cannot be downloaded."""
    pass


class CatalogError(FrameFinderError):
    """Base exception for catalog store operations."""
    pass


class FrameNotFoundError(CatalogError):
    """Raised when a frame id does not exist in the catalog."""
    pass


class AnalysisNotFoundError(CatalogError):
    """Raised when no analysis has been logged for a session."""
    pass


class ServiceNotInitializedError(FrameFinderError):
    """Raised when a service is requested before the container is initialized."""
    pass
