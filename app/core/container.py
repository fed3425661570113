"""Service container for dependency injection."""
from typing import Optional

# Import interfaces
from app.domain.interfaces.extraction.attribute_extractor import AttributeExtractor, ImageFetcher

# Import concrete implementations used for instantiation
from app.infrastructure.http.image_fetcher import HttpImageFetcher
from app.services.extraction.gemini import GeminiAttributeExtractor


class ServiceContainer:
    """Container for long-lived application services.

    Per-request services (catalog, analysis log, matching) are built by the
    FastAPI dependency providers around a database unit of work; the container
    only owns the collaborators that hold network clients.

    Example:
        ```python
        container = ServiceContainer()
        await container.initialize()

        extractor = container.attribute_extractor
        ```
    """

    def __init__(self) -> None:
        """Initialize empty container."""
        self.attribute_extractor: Optional[AttributeExtractor] = None
        self.image_fetcher: Optional[ImageFetcher] = None

    @property
    def initialized(self) -> bool:
        """Whether initialize() has been run."""
        return self.attribute_extractor is not None and self.image_fetcher is not None

    async def initialize(self) -> None:
        """Initialize all services in the correct order."""
        self.attribute_extractor = GeminiAttributeExtractor()
        self.image_fetcher = HttpImageFetcher()

    async def cleanup(self) -> None:
        """Cleanup all services in reverse order of initialization."""
        if isinstance(self.image_fetcher, HttpImageFetcher):
            await self.image_fetcher.close()
        self.image_fetcher = None
        self.attribute_extractor = None


# Global container instance
container = ServiceContainer()
