"""Face analysis service: extract attributes, log them, recommend frames."""
import uuid
from typing import Awaitable, Callable, Optional

from app.core.config import settings
from app.core.exceptions import AnalysisNotFoundError
from app.core.logging import get_logger
from app.domain.entities.analysis import AnalysisRecord
from app.domain.interfaces.extraction.attribute_extractor import AttributeExtractor
from app.infrastructure.database.repositories import AnalysisRepository
from app.services.frame_matching import FrameMatchingService
from app.services.images import validate_upload
from app.services.models import ServiceAnalysisResult

logger = get_logger(__name__)


class FaceAnalysisService:
    """Service running the photo to recommendation flow.

    This service:
    1. Validates the uploaded photo
    2. Extracts facial attributes with the attribute extractor
    3. Logs the analysis under the session id
    4. Ranks the active catalog with the frame matcher

    Example:
        ```python
        service = FaceAnalysisService(extractor, uow.analyses, FrameMatchingService(uow.frames), commit=uow.commit)
        result = await service.analyze_face(image_bytes, "image/jpeg")
        ```
    """

    def __init__(
        self,
        extractor: AttributeExtractor,
        analyses: AnalysisRepository,
        matching_service: FrameMatchingService,
        recommendation_limit: Optional[int] = None,
        commit: Optional[Callable[[], Awaitable[None]]] = None,
    ) -> None:
        """Initialize the face analysis service.

        Args:
            extractor: Facial attribute extractor
            analyses: Analysis log repository
            matching_service: Frame matching service bound to the catalog
            recommendation_limit: Frames to return, defaults to RECOMMENDATION_LIMIT
            commit: Persists the analysis log before matching starts
        """
        self.extractor = extractor
        self.analyses = analyses
        self.matching_service = matching_service
        self.recommendation_limit = recommendation_limit or settings.RECOMMENDATION_LIMIT
        self.commit = commit

    async def analyze_face(
        self,
        image_bytes: bytes,
        mime_type: Optional[str],
        session_id: Optional[str] = None,
    ) -> ServiceAnalysisResult:
        """Analyze a face photo and recommend frames.

        Args:
            image_bytes: Uploaded photo
            mime_type: Declared content type of the photo
            session_id: Client session, generated when missing

        Returns:
            ServiceAnalysisResult with the logged analysis and ranked frames

        Raises:
            InvalidImageError: If the upload is not a usable image
            ImageTooLargeError: If the upload is too large
            AttributeExtractionError: If extraction failed without fallback
            CatalogError: If the catalog cannot be read
        """
        mime_type = validate_upload(image_bytes, mime_type)
        session_id = session_id or str(uuid.uuid4())
        log = logger.bind(session_id=session_id)

        attributes = await self.extractor.extract_attributes(image_bytes, mime_type)
        analysis = await self.analyses.save(session_id, attributes)
        if self.commit is not None:
            # The log must survive a failed match
            await self.commit()
        log.info("Logged facial analysis", analysis_id=analysis.id, face_shape=attributes.face_shape)

        frames = await self.matching_service.search_frames(attributes, self.recommendation_limit)
        log.info("Recommended frames", frame_ids=[frame.id for frame in frames])

        return ServiceAnalysisResult(
            session_id=session_id,
            analysis=analysis,
            recommended_frames=frames,
        )

    async def get_analysis(self, session_id: str) -> AnalysisRecord:
        """Return the latest analysis of a session.

        Raises:
            AnalysisNotFoundError: If the session has no analysis
        """
        analysis = await self.analyses.get_latest_by_session(session_id)
        if analysis is None:
            raise AnalysisNotFoundError(
                f"Analysis not found for session: {session_id}",
                details={"session_id": session_id},
            )
        return analysis
