"""Face analysis API endpoints."""
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from app.api.models.frame import AnalysisDetailResponse, AnalysisResponse, FaceAnalysisResponse
from app.core.exceptions import (
    AnalysisNotFoundError,
    ImageTooLargeError,
    InvalidImageError,
)
from app.core.logging import get_logger
from app.infrastructure.dependencies import get_face_analysis_service
from app.services.face_analysis import FaceAnalysisService

logger = get_logger(__name__)
router = APIRouter(
    responses={
        400: {"description": "Invalid request"},
        500: {"description": "Internal server error"}
    }
)

ANALYSIS_FAILED_MESSAGE = (
    "Failed to analyze face. Please ensure you have a clear photo and try again."
)


@router.post(
    "/analyze-face",
    response_model=FaceAnalysisResponse,
    summary="Analyze a face photo and recommend frames",
    description=(
        "Classifies the face shape in the photo, logs the analysis under the "
        "session and returns the best matching frames."
    ),
    responses={
        400: {
            "description": "Invalid image",
            "content": {
                "application/json": {"example": {"detail": "Only image files are allowed"}}
            },
        },
        413: {"description": "Image too large"},
        500: {
            "description": "Analysis failed",
            "content": {
                "application/json": {"example": {"detail": ANALYSIS_FAILED_MESSAGE}}
            },
        },
    },
)
async def analyze_face(
    photo: UploadFile = File(..., description="Photo of the user's face"),
    session_id: Optional[str] = Form(None, description="Client session id"),
    service: FaceAnalysisService = Depends(get_face_analysis_service),
) -> FaceAnalysisResponse:
    """Analyze a face photo and return frame recommendations.

    Args:
        photo: Uploaded face photo
        session_id: Optional client session, generated when missing
        service: Face analysis service provided by dependency injection

    Returns:
        FaceAnalysisResponse with the logged analysis and recommended frames

    Raises:
        HTTPException: If the image is invalid or analysis fails
    """
    try:
        image_bytes = await photo.read()
        result = await service.analyze_face(image_bytes, photo.content_type, session_id)
        return FaceAnalysisResponse.from_service_response(result)

    except InvalidImageError as e:
        logger.warning("Invalid image upload", error=str(e), content_type=photo.content_type)
        raise HTTPException(status_code=400, detail=str(e))
    except ImageTooLargeError as e:
        logger.warning("Image upload too large", error=str(e))
        raise HTTPException(status_code=413, detail=str(e))
    except Exception as e:
        logger.error("Face analysis failed", error=str(e), exc_info=True)
        raise HTTPException(status_code=500, detail=ANALYSIS_FAILED_MESSAGE)


@router.get(
    "/{session_id}",
    response_model=AnalysisDetailResponse,
    summary="Get the latest analysis of a session",
    responses={404: {"description": "Analysis not found"}},
)
async def get_analysis(
    session_id: str,
    service: FaceAnalysisService = Depends(get_face_analysis_service),
) -> AnalysisDetailResponse:
    """Return the latest analysis logged for a session."""
    try:
        record = await service.get_analysis(session_id)
        return AnalysisDetailResponse(analysis=AnalysisResponse.from_record(record))
    except AnalysisNotFoundError:
        raise HTTPException(status_code=404, detail="Analysis not found")
