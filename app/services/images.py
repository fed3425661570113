"""Validation of uploaded photos."""
from typing import Optional

from app.core.config import settings
from app.core.exceptions import ImageTooLargeError, InvalidImageError


def validate_upload(image_bytes: bytes, mime_type: Optional[str], max_bytes: Optional[int] = None) -> str:
    """Check an uploaded photo and return its MIME type.

    Args:
        image_bytes: Uploaded data
        mime_type: Declared content type
        max_bytes: Size limit, defaults to MAX_UPLOAD_BYTES

    Returns:
        str: The MIME type to forward to the model

    Raises:
        InvalidImageError: If the upload is empty or not an image
        ImageTooLargeError: If the upload exceeds the size limit
    """
    limit = max_bytes if max_bytes is not None else settings.MAX_UPLOAD_BYTES
    if not mime_type or not mime_type.startswith("image/"):
        raise InvalidImageError("Only image files are allowed", details={"mime_type": mime_type})
    if not image_bytes:
        raise InvalidImageError("No photo provided")
    if len(image_bytes) > limit:
        raise ImageTooLargeError(
            f"Image exceeds {limit} bytes",
            details={"size": len(image_bytes), "limit": limit},
        )
    return mime_type
