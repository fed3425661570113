"""API specific frame and analysis models."""
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from app.domain.entities.analysis import AnalysisRecord, FacialAttributes, TryOnResult
from app.domain.entities.frame import FrameProduct
from app.services.models import ServiceAnalysisResult

# Constants for validation ranges used in API models
MIN_CONFIDENCE = 0.0
MAX_CONFIDENCE = 1.0


class FrameResponse(BaseModel):
    """API model for a catalog frame. Match scores are never exposed."""
    id: str = Field(..., description="Frame identifier")
    name: str = Field(..., description="Display name")
    brand: str = Field(..., description="Brand")
    style: str = Field(..., description="Frame style")
    color: str = Field(..., description="Frame color")
    size: str = Field(..., description="Frame size")
    price: Decimal = Field(..., description="Retail price")
    stock_status: str = Field(..., description="in_stock, low_stock, out_of_stock or order_only")
    stock_count: Optional[int] = Field(None, description="Units in stock")
    image_url: str = Field(..., description="Product photo URL")
    description: Optional[str] = Field(None, description="Marketing description")
    features: Dict[str, Any] = Field(default_factory=dict, description="Additional features")
    suitable_face_shapes: List[str] = Field(default_factory=list,
                                            description="Face shapes the frame suits")

    @classmethod
    def from_frame(cls, frame: FrameProduct) -> "FrameResponse":
        """Create an API FrameResponse from a domain FrameProduct."""
        return cls(
            id=frame.id,
            name=frame.name,
            brand=frame.brand,
            style=frame.style,
            color=frame.color,
            size=frame.size,
            price=frame.price,
            stock_status=frame.stock_status.value,
            stock_count=frame.stock_count,
            image_url=frame.image_url,
            description=frame.description,
            features=dict(frame.features),
            suitable_face_shapes=list(frame.suitable_face_shapes),
        )


class FrameListResponse(BaseModel):
    """Response model for frame lists."""
    frames: List[FrameResponse] = Field(..., description="Frames, best match first for searches")

    @classmethod
    def from_frames(cls, frames: List[FrameProduct]) -> "FrameListResponse":
        return cls(frames=[FrameResponse.from_frame(frame) for frame in frames])


class FrameDetailResponse(BaseModel):
    """Response model for a single frame."""
    frame: FrameResponse


class FrameSearchRequest(BaseModel):
    """Request model for the /frames/search endpoint."""
    face_shape: str = Field(..., description="Face shape token, e.g. oval", min_length=1)
    recommended_sizes: List[str] = Field(default_factory=list, description="Size tokens")
    recommended_colors: List[str] = Field(default_factory=list, description="Color tokens")
    recommended_styles: List[str] = Field(default_factory=list, description="Style tokens")

    def to_attributes(self) -> FacialAttributes:
        """Convert search criteria into matcher attributes."""
        return FacialAttributes(
            face_shape=self.face_shape,
            recommended_sizes=self.recommended_sizes,
            recommended_colors=self.recommended_colors,
            recommended_styles=self.recommended_styles,
        )


class AnalysisResponse(BaseModel):
    """API model for a logged facial analysis."""
    id: str = Field(..., description="Analysis identifier")
    session_id: str = Field(..., description="Client session")
    face_shape: str = Field(..., description="Detected face shape")
    recommended_sizes: List[str] = Field(..., description="Recommended frame sizes")
    recommended_colors: List[str] = Field(..., description="Recommended frame colors")
    recommended_styles: List[str] = Field(..., description="Recommended frame styles")
    confidence: Optional[float] = Field(None, description="Model confidence",
                                        ge=MIN_CONFIDENCE, le=MAX_CONFIDENCE)
    reasoning: Optional[str] = Field(None, description="Model explanation")
    created_at: Optional[datetime] = Field(None, description="When the analysis was logged")

    @classmethod
    def from_record(cls, record: AnalysisRecord) -> "AnalysisResponse":
        """Create an API AnalysisResponse from a domain AnalysisRecord."""
        attributes = record.attributes
        return cls(
            id=record.id,
            session_id=record.session_id,
            face_shape=attributes.face_shape,
            recommended_sizes=list(attributes.recommended_sizes),
            recommended_colors=list(attributes.recommended_colors),
            recommended_styles=list(attributes.recommended_styles),
            confidence=attributes.confidence,
            reasoning=record.analysis_data.get("reasoning"),
            created_at=record.created_at,
        )


class AnalysisDetailResponse(BaseModel):
    """Response model for the /analysis/{session_id} endpoint."""
    analysis: AnalysisResponse


class FaceAnalysisResponse(BaseModel):
    """Response model for the /analysis/analyze-face endpoint."""
    session_id: str = Field(..., description="Session the analysis was logged under")
    analysis: AnalysisResponse = Field(..., description="Logged analysis")
    recommended_frames: List[FrameResponse] = Field(..., description="Best matching frames")

    @classmethod
    def from_service_response(cls, service_response: ServiceAnalysisResult) -> "FaceAnalysisResponse":
        """Convert the service layer result to the API response model."""
        return cls(
            session_id=service_response.session_id,
            analysis=AnalysisResponse.from_record(service_response.analysis),
            recommended_frames=[
                FrameResponse.from_frame(frame) for frame in service_response.recommended_frames
            ],
        )


class SeedResponse(BaseModel):
    """Response model for the /frames/seed endpoint."""
    message: str
    frames: List[FrameResponse]


class TryOnResponse(BaseModel):
    """Response model for the /try-on endpoint."""
    frame_id: str = Field(..., description="Frame that was tried on")
    image_base64: str = Field(..., description="Base64 encoded composite image")
    mime_type: str = Field(..., description="MIME type of the image")
    description: str = Field(..., description="How the frame suits the face")
    generated: bool = Field(..., description="False when the original photo was returned")

    @classmethod
    def from_result(cls, frame_id: str, result: TryOnResult) -> "TryOnResponse":
        return cls(frame_id=frame_id, **result.model_dump())
