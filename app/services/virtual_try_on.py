"""Virtual try-on service."""
from typing import Optional

from app.core.logging import get_logger
from app.domain.entities.analysis import TryOnResult
from app.domain.interfaces.extraction.attribute_extractor import AttributeExtractor, ImageFetcher
from app.services.frame_matching import FrameMatchingService
from app.services.images import validate_upload

logger = get_logger(__name__)


class VirtualTryOnService:
    """Composes a user photo with a catalog frame through the extractor's image model."""

    def __init__(
        self,
        extractor: AttributeExtractor,
        matching_service: FrameMatchingService,
        image_fetcher: ImageFetcher,
    ) -> None:
        self.extractor = extractor
        self.matching_service = matching_service
        self.image_fetcher = image_fetcher

    async def try_on(
        self,
        photo_bytes: bytes,
        mime_type: Optional[str],
        frame_id: str,
    ) -> TryOnResult:
        """Render the user wearing a frame.

        Raises:
            InvalidImageError: If the photo is not a usable image
            ImageTooLargeError: If the photo is too large
            FrameNotFoundError: If the frame does not exist
            FrameImageError: If the frame photo cannot be downloaded
        """
        mime_type = validate_upload(photo_bytes, mime_type)
        frame = await self.matching_service.get_frame(frame_id)
        frame_image, frame_mime_type = await self.image_fetcher.fetch(frame.image_url)

        result = await self.extractor.generate_try_on(
            photo_bytes,
            mime_type,
            frame_image,
            frame_mime_type,
            frame,
        )
        logger.info("Virtual try-on finished", frame_id=frame.id, generated=result.generated)
        return result
