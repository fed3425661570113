"""Facial analysis entities."""
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class FacialAttributes(BaseModel):
    """Frame-relevant attributes extracted from a face photo.

    The extractor contract asks for two entries per recommendation list, but
    any length is accepted. Keys are accepted in the model's camelCase form or
    by field name.
    """
    face_shape: str = Field(..., alias="faceShape", description="Detected face shape token")
    recommended_sizes: List[str] = Field(default_factory=list, alias="recommendedSizes")
    recommended_colors: List[str] = Field(default_factory=list, alias="recommendedColors")
    recommended_styles: List[str] = Field(default_factory=list, alias="recommendedStyles")
    confidence: Optional[float] = Field(None, ge=0.0, le=1.0,
                                        description="Informational only, never used for ranking")
    reasoning: Optional[str] = Field(None, description="Short explanation from the model")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def accept_single_size(cls, data: Any) -> Any:
        """Wrap a legacy singular ``recommendedSize`` into the sizes list."""
        if not isinstance(data, dict):
            return data
        if "recommendedSizes" in data or "recommended_sizes" in data:
            return data
        single = data.get("recommendedSize", data.get("recommended_size"))
        if single is None:
            return data
        data = dict(data)
        data["recommendedSizes"] = [single]
        return data


class AnalysisRecord(BaseModel):
    """Analysis log entry stored per session before matching."""
    id: str = Field(..., description="Analysis identifier")
    session_id: str = Field(..., description="Client session the analysis belongs to")
    attributes: FacialAttributes = Field(..., description="Attributes used for matching")
    analysis_data: Dict[str, Any] = Field(default_factory=dict,
                                          description="Raw extractor payload")
    created_at: Optional[datetime] = Field(None, description="When the analysis was logged")


class TryOnResult(BaseModel):
    """Virtual try-on composite returned by the extractor."""
    image_base64: str = Field(..., description="Base64 encoded image")
    mime_type: str = Field("image/jpeg", description="MIME type of the image")
    description: str = Field(..., description="How the frame suits the face")
    generated: bool = Field(..., description="False when the original photo is returned")
