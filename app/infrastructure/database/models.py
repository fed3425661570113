"""SQLAlchemy models for the frame catalog and analysis log."""
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Boolean, DateTime, Float, Index, Integer, Numeric, String, Text, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    """Timezone-aware UTC timestamp used as column default."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class Frame(Base):
    """Eyewear frame product in the catalog."""

    __tablename__ = "frames"
    __table_args__ = (
        Index("idx_frames_active_ingest", "is_active", "ingest_seq"),
    )

    ingest_seq: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Ingestion order, the final ranking tie-break"
    )
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        unique=True,
        nullable=False,
        default=uuid.uuid4
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    brand: Mapped[str] = mapped_column(String(255), nullable=False)
    style: Mapped[str] = mapped_column(String(64), nullable=False, comment="Aviator, Round, ...")
    color: Mapped[str] = mapped_column(String(64), nullable=False)
    size: Mapped[str] = mapped_column(String(16), nullable=False, comment="Small, Medium, Large")
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    stock_status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default="in_stock",
        comment="in_stock, low_stock, out_of_stock, order_only"
    )
    stock_count: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, comment="NULL when unknown")
    image_url: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    features: Mapped[Optional[Dict[str, Any]]] = mapped_column(
        JSON,
        nullable=True,
        comment="Material, lens type, weight, ..."
    )
    suitable_face_shapes: Mapped[Optional[List[str]]] = mapped_column(
        JSON,
        nullable=True,
        comment="Face shapes the frame is designed for"
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        comment="Ingestion time"
    )


class AnalysisResult(Base):
    """Facial analysis logged per session before frames are matched."""

    __tablename__ = "analysis_results"
    __table_args__ = (
        Index("idx_analysis_session_created", "session_id", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4
    )
    session_id: Mapped[str] = mapped_column(String(255), nullable=False)
    face_shape: Mapped[str] = mapped_column(String(32), nullable=False)
    recommended_sizes: Mapped[List[str]] = mapped_column(JSON, nullable=False)
    recommended_colors: Mapped[Optional[List[str]]] = mapped_column(JSON, nullable=True)
    recommended_styles: Mapped[Optional[List[str]]] = mapped_column(JSON, nullable=True)
    confidence: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    analysis_data: Mapped[Optional[Dict[str, Any]]] = mapped_column(
        JSON,
        nullable=True,
        comment="Full extractor response"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow
    )
