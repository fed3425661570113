"""Frame catalog API endpoints."""
from fastapi import APIRouter, Depends, HTTPException, Query

from app.api.models.frame import (
    FrameDetailResponse,
    FrameListResponse,
    FrameResponse,
    FrameSearchRequest,
    SeedResponse,
)
from app.core.config import settings
from app.core.exceptions import CatalogError, FrameNotFoundError, InvalidLimitError
from app.core.logging import get_logger
from app.infrastructure.database.seed import seed_frames
from app.infrastructure.database.unit_of_work import UnitOfWork
from app.infrastructure.dependencies import get_frame_matching_service, get_uow
from app.services.frame_matching import DEFAULT_LIMIT, FrameMatchingService

logger = get_logger(__name__)
router = APIRouter(
    responses={
        500: {"description": "Internal server error"}
    }
)


@router.post(
    "/search",
    response_model=FrameListResponse,
    summary="Search frames by facial attributes",
    description="Ranks the active catalog against the given attributes and returns the best frames.",
    responses={
        200: {
            "description": "Frames ranked best first",
            "content": {
                "application/json": {
                    "example": {
                        "frames": [
                            {
                                "id": "550e8400-e29b-41d4-a716-446655440000",
                                "name": "Classic Aviator",
                                "brand": "Ray-Ban",
                                "style": "Aviator",
                                "color": "Gold",
                                "size": "Medium",
                                "price": "189.99",
                                "stock_status": "in_stock",
                                "stock_count": 25,
                                "image_url": "https://example.com/aviator.jpg",
                                "description": "Timeless aviator design",
                                "features": {"material": "metal"},
                                "suitable_face_shapes": ["oval", "square", "heart"],
                            }
                        ]
                    }
                }
            },
        },
        400: {
            "description": "Invalid limit",
            "content": {
                "application/json": {
                    "example": {"detail": "Limit must be a positive integer, got 0"}
                }
            },
        },
    },
)
async def search_frames(
    request: FrameSearchRequest,
    limit: int = Query(DEFAULT_LIMIT, le=settings.MAX_MATCH_LIMIT,
                       description="Maximum number of frames to return"),
    service: FrameMatchingService = Depends(get_frame_matching_service),
) -> FrameListResponse:
    """Search the catalog for frames matching the attributes.

    Args:
        request: Search criteria
        limit: Maximum number of frames
        service: Frame matching service provided by dependency injection

    Returns:
        FrameListResponse with at most ``limit`` frames

    Raises:
        HTTPException: If the limit is invalid or the catalog cannot be read
    """
    try:
        frames = await service.search_frames(request.to_attributes(), limit)
        return FrameListResponse.from_frames(frames)

    except InvalidLimitError as e:
        logger.warning("Invalid search limit", limit=limit, error=str(e))
        raise HTTPException(status_code=400, detail=str(e))
    except CatalogError as e:
        logger.error("Frame search failed", error=str(e))
        raise HTTPException(status_code=500, detail="Failed to search frames. Please try again.")


@router.get(
    "",
    response_model=FrameListResponse,
    summary="List active frames",
)
async def list_frames(
    service: FrameMatchingService = Depends(get_frame_matching_service),
) -> FrameListResponse:
    """Return every active frame in catalog order."""
    try:
        return FrameListResponse.from_frames(await service.list_frames())
    except CatalogError as e:
        logger.error("Listing frames failed", error=str(e))
        raise HTTPException(status_code=500, detail="Failed to retrieve frames.")


@router.post(
    "/seed",
    response_model=SeedResponse,
    summary="Seed demo frames (development only)",
)
async def seed_demo_frames(uow: UnitOfWork = Depends(get_uow)) -> SeedResponse:
    """Insert the demo frames into the catalog."""
    if settings.ENVIRONMENT != "development":
        raise HTTPException(status_code=404, detail="Not Found")

    frames = await seed_frames(uow)
    return SeedResponse(
        message=f"Successfully added {len(frames)} test frames",
        frames=[FrameResponse.from_frame(frame) for frame in frames],
    )


@router.get(
    "/{frame_id}",
    response_model=FrameDetailResponse,
    summary="Get a frame",
    responses={404: {"description": "Frame not found"}},
)
async def get_frame(
    frame_id: str,
    service: FrameMatchingService = Depends(get_frame_matching_service),
) -> FrameDetailResponse:
    """Return a single frame by id."""
    try:
        frame = await service.get_frame(frame_id)
        return FrameDetailResponse(frame=FrameResponse.from_frame(frame))
    except FrameNotFoundError:
        raise HTTPException(status_code=404, detail="Frame not found")
