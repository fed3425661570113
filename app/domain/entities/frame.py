"""Eyewear frame catalog entities."""
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.domain.entities.vocabulary import StockStatus


class NewFrame(BaseModel):
    """Frame data as provided by catalog ingestion, before an id is assigned.

    Style, color, size and face shapes are kept as the raw catalog tokens; the
    matcher decides what counts as a known token.
    """
    name: str = Field(..., description="Display name of the frame")
    brand: str = Field(..., description="Frame brand")
    style: str = Field(..., description="Frame style token, e.g. Aviator")
    color: str = Field(..., description="Frame color token, e.g. Gold")
    size: str = Field(..., description="Frame size token: Small, Medium or Large")
    price: Decimal = Field(..., description="Retail price", ge=0)
    stock_status: StockStatus = Field(StockStatus.IN_STOCK, description="Availability")
    stock_count: Optional[int] = Field(0, description="Units in stock, None if unknown", ge=0)
    image_url: str = Field(..., description="Product photo URL")
    description: Optional[str] = Field(None, description="Marketing description")
    features: Dict[str, Any] = Field(default_factory=dict,
                                     description="Material, lens type, weight, ...")
    suitable_face_shapes: List[str] = Field(default_factory=list,
                                            description="Face shapes the frame is designed for")
    is_active: bool = Field(True, description="Inactive frames are never recommended")

    model_config = ConfigDict(frozen=True)


class FrameProduct(NewFrame):
    """A frame as stored in the catalog."""
    id: str = Field(..., description="Opaque catalog identifier")
