"""Database repositories for the frame catalog and analysis log."""
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import CatalogError
from app.core.logging import get_logger
from app.domain.entities.analysis import AnalysisRecord, FacialAttributes
from app.domain.entities.frame import FrameProduct, NewFrame
from app.domain.interfaces.catalog.frame_catalog import FrameCatalog
from app.infrastructure.database.models import AnalysisResult, Frame

logger = get_logger(__name__)


def _parse_uuid(value: str) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


def frame_to_domain(frame: Frame) -> FrameProduct:
    """Convert a Frame row into a FrameProduct."""
    return FrameProduct(
        id=str(frame.id),
        name=frame.name,
        brand=frame.brand,
        style=frame.style,
        color=frame.color,
        size=frame.size,
        price=frame.price,
        stock_status=frame.stock_status,
        stock_count=frame.stock_count,
        image_url=frame.image_url,
        description=frame.description,
        features=frame.features or {},
        suitable_face_shapes=frame.suitable_face_shapes or [],
        is_active=frame.is_active,
    )


def analysis_to_domain(row: AnalysisResult) -> AnalysisRecord:
    """Convert an AnalysisResult row into an AnalysisRecord."""
    return AnalysisRecord(
        id=str(row.id),
        session_id=row.session_id,
        attributes=FacialAttributes(
            face_shape=row.face_shape,
            recommended_sizes=row.recommended_sizes or [],
            recommended_colors=row.recommended_colors or [],
            recommended_styles=row.recommended_styles or [],
            confidence=row.confidence,
        ),
        analysis_data=row.analysis_data or {},
        created_at=row.created_at,
    )


class FrameRepository(FrameCatalog):
    """Repository for frame catalog operations.

    Implements the catalog by pulling all active rows and leaving the scoring
    to the in-process matcher.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository.

        Args:
            session: Database session
        """
        self._session = session

    async def fetch_active_catalog(self) -> List[FrameProduct]:
        """Get all active frames in ingestion order.

        Returns:
            List[FrameProduct]: Active frames ordered by ingestion sequence

        Raises:
            CatalogError: If the query fails
        """
        stmt = (
            select(Frame)
            .where(Frame.is_active.is_(True))
            .order_by(Frame.ingest_seq)
        )
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            logger.error("Failed to fetch active catalog", error=str(e), exc_info=True)
            raise CatalogError("Failed to fetch active catalog") from e
        return [frame_to_domain(frame) for frame in result.scalars().all()]

    async def list_all(self) -> List[FrameProduct]:
        """Get every frame, inactive ones included, in ingestion order."""
        result = await self._session.execute(select(Frame).order_by(Frame.ingest_seq))
        return [frame_to_domain(frame) for frame in result.scalars().all()]

    async def fetch_by_id(self, frame_id: str) -> Optional[FrameProduct]:
        """Get a frame by id, active or not.

        Args:
            frame_id: Frame identifier

        Returns:
            Optional[FrameProduct]: The frame, or None if the id is unknown or malformed
        """
        parsed = _parse_uuid(frame_id)
        if parsed is None:
            return None
        result = await self._session.execute(select(Frame).where(Frame.id == parsed))
        frame = result.scalar_one_or_none()
        return frame_to_domain(frame) if frame else None

    async def create(self, new_frame: NewFrame) -> FrameProduct:
        """Create a new frame.

        Args:
            new_frame: Frame data

        Returns:
            FrameProduct: Created frame
        """
        data = new_frame.model_dump()
        data["stock_status"] = new_frame.stock_status.value
        frame = Frame(**data)
        self._session.add(frame)
        await self._session.flush()
        return frame_to_domain(frame)


class AnalysisRepository:
    """Repository for the analysis log."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository.

        Args:
            session: Database session
        """
        self._session = session

    async def save(
        self,
        session_id: str,
        attributes: FacialAttributes,
        analysis_data: Optional[Dict[str, Any]] = None,
    ) -> AnalysisRecord:
        """Log an analysis for a session.

        Args:
            session_id: Client session identifier
            attributes: Extracted attributes
            analysis_data: Raw extractor payload, defaults to the attributes themselves

        Returns:
            AnalysisRecord: Stored analysis
        """
        row = AnalysisResult(
            session_id=session_id,
            face_shape=attributes.face_shape,
            recommended_sizes=list(attributes.recommended_sizes),
            recommended_colors=list(attributes.recommended_colors),
            recommended_styles=list(attributes.recommended_styles),
            confidence=attributes.confidence,
            analysis_data=analysis_data or attributes.model_dump(by_alias=True),
        )
        self._session.add(row)
        await self._session.flush()
        return analysis_to_domain(row)

    async def get_latest_by_session(self, session_id: str) -> Optional[AnalysisRecord]:
        """Get the most recent analysis of a session.

        Args:
            session_id: Client session identifier

        Returns:
            Optional[AnalysisRecord]: Latest analysis, or None
        """
        stmt = (
            select(AnalysisResult)
            .where(AnalysisResult.session_id == session_id)
            .order_by(AnalysisResult.created_at.desc())
            .limit(1)
        )
        result = await self._session.execute(stmt)
        row = result.scalar_one_or_none()
        return analysis_to_domain(row) if row else None
