"""Service-specific models.

This module contains models used by services that are independent of the API layer.
"""
from typing import List

from pydantic import BaseModel, Field

from app.domain.entities.analysis import AnalysisRecord
from app.domain.entities.frame import FrameProduct


class ServiceAnalysisResult(BaseModel):
    """Result of analysing a face photo and matching frames to it."""
    session_id: str = Field(..., description="Session the analysis was logged under")
    analysis: AnalysisRecord = Field(..., description="Logged analysis")
    recommended_frames: List[FrameProduct] = Field(...,
                                                   description="Best matching frames, best first")
