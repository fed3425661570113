"""HTTP image fetcher using httpx."""
from typing import Optional, Tuple

import httpx

from app.core.config import settings
from app.core.exceptions import FrameImageError
from app.core.logging import get_logger
from app.domain.interfaces.extraction.attribute_extractor import ImageFetcher

logger = get_logger(__name__)


class HttpImageFetcher(ImageFetcher):
    """Downloads frame product photos over HTTP."""

    def __init__(self, client: Optional[httpx.AsyncClient] = None) -> None:
        """Store the client; one is created lazily if not provided."""
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            logger.debug("Initializing httpx client for image downloads")
            self._client = httpx.AsyncClient(
                timeout=settings.IMAGE_FETCH_TIMEOUT,
                follow_redirects=True,
            )
        return self._client

    async def fetch(self, url: str) -> Tuple[bytes, str]:
        """Download an image and return its bytes and MIME type.

        Raises:
            FrameImageError: On network errors, HTTP errors or non-image content
        """
        try:
            response = await self._get_client().get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Failed to download frame image", url=url, error=str(e))
            raise FrameImageError(f"Failed to download frame image: {url}", details={"url": url}) from e

        mime_type = response.headers.get("content-type", "image/jpeg").split(";")[0].strip()
        if not mime_type.startswith("image/"):
            raise FrameImageError(
                f"Frame image URL did not return an image: {url}",
                details={"url": url, "content_type": mime_type},
            )
        return response.content, mime_type

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
