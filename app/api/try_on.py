"""Virtual try-on API endpoint."""
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from app.api.models.frame import TryOnResponse
from app.core.exceptions import (
    FrameImageError,
    FrameNotFoundError,
    ImageTooLargeError,
    InvalidImageError,
)
from app.core.logging import get_logger
from app.infrastructure.dependencies import get_virtual_try_on_service
from app.services.virtual_try_on import VirtualTryOnService

logger = get_logger(__name__)
router = APIRouter()


@router.post(
    "",
    response_model=TryOnResponse,
    summary="Render the user wearing a frame",
    responses={
        400: {"description": "Invalid image"},
        404: {"description": "Frame not found"},
        413: {"description": "Image too large"},
        502: {"description": "Frame image unavailable"},
    },
)
async def try_on(
    photo: UploadFile = File(..., description="Photo of the user's face"),
    frame_id: str = Form(..., description="Frame to try on"),
    service: VirtualTryOnService = Depends(get_virtual_try_on_service),
) -> TryOnResponse:
    """Generate a virtual try-on composite.

    Generation failures return the original photo with ``generated`` set to false.
    """
    try:
        result = await service.try_on(await photo.read(), photo.content_type, frame_id)
        return TryOnResponse.from_result(frame_id, result)

    except InvalidImageError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ImageTooLargeError as e:
        raise HTTPException(status_code=413, detail=str(e))
    except FrameNotFoundError:
        raise HTTPException(status_code=404, detail="Frame not found")
    except FrameImageError as e:
        logger.error("Frame image unavailable", frame_id=frame_id, error=str(e))
        raise HTTPException(status_code=502, detail="Failed to load frame image. Please try again.")
