"""API v1 router initialization."""
from fastapi import APIRouter

from .analysis import router as analysis_router
from .frames import router as frames_router
from .try_on import router as try_on_router

# Create v1 router
router = APIRouter()

router.include_router(
    analysis_router,
    prefix="/analysis",
    tags=["analysis"]
)
router.include_router(
    frames_router,
    prefix="/frames",
    tags=["frames"]
)
router.include_router(
    try_on_router,
    prefix="/try-on",
    tags=["try-on"]
)
