"""FastAPI dependency providers."""
from typing import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.container import ServiceContainer, container
from app.core.exceptions import ServiceNotInitializedError
from app.domain.interfaces.extraction.attribute_extractor import AttributeExtractor, ImageFetcher
from app.infrastructure.database.session import get_db_session
from app.infrastructure.database.unit_of_work import UnitOfWork
from app.services.face_analysis import FaceAnalysisService
from app.services.frame_matching import FrameMatchingService
from app.services.virtual_try_on import VirtualTryOnService


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session.

    Yields:
        AsyncSession: Database session
    """
    async with get_db_session() as session:
        yield session


async def get_uow(
    session: AsyncSession = Depends(get_session)
) -> AsyncGenerator[UnitOfWork, None]:
    """Get unit of work, committed when the request succeeds.

    Args:
        session: Database session

    Yields:
        UnitOfWork: Unit of work instance
    """
    async with UnitOfWork(session) as uow:
        yield uow


async def get_container() -> ServiceContainer:
    """Dependency provider for the global ServiceContainer instance."""
    if not container.initialized:
        # Lifespan did not run (e.g. scripts); initialize on demand
        try:
            await container.initialize()
        except Exception as e:
            raise ServiceNotInitializedError(f"Service container could not be initialized: {e}")
    return container


async def get_attribute_extractor(
    cont: ServiceContainer = Depends(get_container),
) -> AttributeExtractor:
    """Provide the attribute extractor.

    Raises:
        ServiceNotInitializedError: If the extractor is not initialized
    """
    if cont.attribute_extractor is None:
        raise ServiceNotInitializedError("Attribute extractor not initialized")
    return cont.attribute_extractor


async def get_image_fetcher(
    cont: ServiceContainer = Depends(get_container),
) -> ImageFetcher:
    """Provide the frame image fetcher.

    Raises:
        ServiceNotInitializedError: If the fetcher is not initialized
    """
    if cont.image_fetcher is None:
        raise ServiceNotInitializedError("Image fetcher not initialized")
    return cont.image_fetcher


async def get_frame_matching_service(
    uow: UnitOfWork = Depends(get_uow),
) -> FrameMatchingService:
    """Provide the frame matching service bound to the request's catalog."""
    return FrameMatchingService(catalog=uow.frames)


async def get_face_analysis_service(
    uow: UnitOfWork = Depends(get_uow),
    extractor: AttributeExtractor = Depends(get_attribute_extractor),
    matching_service: FrameMatchingService = Depends(get_frame_matching_service),
) -> FaceAnalysisService:
    """Provide the face analysis service.

    Args:
        uow: Unit of work of the request
        extractor: Attribute extractor instance
        matching_service: Frame matching service on the same unit of work

    Returns:
        FaceAnalysisService: Service for the request
    """
    return FaceAnalysisService(
        extractor=extractor,
        analyses=uow.analyses,
        matching_service=matching_service,
        commit=uow.commit,
    )


async def get_virtual_try_on_service(
    extractor: AttributeExtractor = Depends(get_attribute_extractor),
    matching_service: FrameMatchingService = Depends(get_frame_matching_service),
    image_fetcher: ImageFetcher = Depends(get_image_fetcher),
) -> VirtualTryOnService:
    """Provide the virtual try-on service."""
    return VirtualTryOnService(
        extractor=extractor,
        matching_service=matching_service,
        image_fetcher=image_fetcher,
    )
