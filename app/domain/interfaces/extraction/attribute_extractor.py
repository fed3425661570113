"""Facial attribute extraction interface."""
from abc import ABC, abstractmethod
from typing import Tuple

from ...entities.analysis import FacialAttributes, TryOnResult
from ...entities.frame import FrameProduct


class AttributeExtractor(ABC):
    """Interface for the model that classifies faces and renders try-ons."""

    @abstractmethod
    async def extract_attributes(
        self,
        image_bytes: bytes,
        mime_type: str = "image/jpeg",
    ) -> FacialAttributes:
        """
        Classify a face photo into the frame vocabularies.

        Args:
            image_bytes: Raw image data
            mime_type: MIME type of the image

        Returns:
            FacialAttributes. Implementations may return a documented fallback
            attribute set when the model stays unavailable after retries.

        Raises:
            AttributeExtractionError: If extraction failed and no fallback applies
        """
        pass

    @abstractmethod
    async def generate_try_on(
        self,
        photo_bytes: bytes,
        photo_mime_type: str,
        frame_image_bytes: bytes,
        frame_image_mime_type: str,
        frame: FrameProduct,
    ) -> TryOnResult:
        """
        Render the person from the photo wearing the given frame.

        Args:
            photo_bytes: User photo
            photo_mime_type: MIME type of the user photo
            frame_image_bytes: Product photo of the frame
            frame_image_mime_type: MIME type of the product photo
            frame: Catalog entry of the frame

        Returns:
            TryOnResult; ``generated`` is False when the original photo is returned
        """
        pass


class ImageFetcher(ABC):
    """Interface for downloading product images."""

    @abstractmethod
    async def fetch(self, url: str) -> Tuple[bytes, str]:
        """
        Download an image.

        Args:
            url: Image URL

        Returns:
            Tuple of image bytes and MIME type

        Raises:
            FrameImageError: If the image cannot be downloaded
        """
        pass
