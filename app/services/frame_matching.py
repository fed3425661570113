"""Frame matching: rank catalog frames against extracted facial attributes.

The matcher is a pure function over an attributes record and a catalog
snapshot. Each active frame is scored by folding the ``MATCH_FACTORS`` table
over it, frames are ordered by score with a stable sort (equal scores keep
their catalog order) and the result is truncated to ``limit``.

Weights:
    face shape 30, size 25, color 20, style 20 (attribute fit, 95 max)
    in stock 10 or low stock 5, plus min(stock_count / 10, 5) (15 max)

Attribute fit always dominates stock, so an out-of-stock perfect match
outranks an in-stock frame that fits nothing.

Example:
    ```python
    frames = match_frames(attributes, catalog, limit=5)
    ```
"""
from typing import List, Optional, Sequence

from app.core.exceptions import FrameNotFoundError, InvalidLimitError
from app.core.logging import get_logger
from app.domain.entities.analysis import FacialAttributes
from app.domain.entities.frame import FrameProduct
from app.domain.entities.vocabulary import (
    FaceShape,
    FrameColor,
    FrameSize,
    FrameStyle,
    StockStatus,
)
from app.domain.interfaces.catalog.frame_catalog import FrameCatalog
from app.domain.value_objects.matching import MatchFactor, ScoredCandidate

logger = get_logger(__name__)

DEFAULT_LIMIT = 5

FACE_SHAPE_WEIGHT = 30.0
SIZE_WEIGHT = 25.0
COLOR_WEIGHT = 20.0
STYLE_WEIGHT = 20.0
IN_STOCK_WEIGHT = 10.0
LOW_STOCK_WEIGHT = 5.0
STOCK_DEPTH_DIVISOR = 10.0
STOCK_DEPTH_CAP = 5.0


def _shape_fits(attributes: FacialAttributes, frame: FrameProduct) -> bool:
    shape = FaceShape.parse(attributes.face_shape)
    return shape is not None and shape.value in frame.suitable_face_shapes


def _size_fits(attributes: FacialAttributes, frame: FrameProduct) -> bool:
    return frame.size in FrameSize.known(attributes.recommended_sizes)


def _color_fits(attributes: FacialAttributes, frame: FrameProduct) -> bool:
    return frame.color in FrameColor.known(attributes.recommended_colors)


def _style_fits(attributes: FacialAttributes, frame: FrameProduct) -> bool:
    return frame.style in FrameStyle.known(attributes.recommended_styles)


def _stock_depth(frame: FrameProduct) -> float:
    count = frame.stock_count or 0
    return min(count / STOCK_DEPTH_DIVISOR, STOCK_DEPTH_CAP)


def _flat(weight: float):
    return lambda frame: weight


MATCH_FACTORS = (
    MatchFactor("face_shape", _shape_fits, _flat(FACE_SHAPE_WEIGHT)),
    MatchFactor("size", _size_fits, _flat(SIZE_WEIGHT)),
    MatchFactor("color", _color_fits, _flat(COLOR_WEIGHT)),
    MatchFactor("style", _style_fits, _flat(STYLE_WEIGHT)),
    MatchFactor(
        "in_stock",
        lambda attributes, frame: frame.stock_status == StockStatus.IN_STOCK,
        _flat(IN_STOCK_WEIGHT),
    ),
    MatchFactor(
        "low_stock",
        lambda attributes, frame: frame.stock_status == StockStatus.LOW_STOCK,
        _flat(LOW_STOCK_WEIGHT),
    ),
    MatchFactor(
        "stock_depth",
        lambda attributes, frame: (frame.stock_count or 0) > 0,
        _stock_depth,
    ),
)


def score_frame(attributes: FacialAttributes, frame: FrameProduct) -> float:
    """Sum the weights of every factor that applies to the frame."""
    return sum(
        factor.weight(frame)
        for factor in MATCH_FACTORS
        if factor.applies(attributes, frame)
    )


def _validate_limit(limit: object) -> int:
    # bool is an int subclass but never a meaningful limit
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise InvalidLimitError(
            f"Limit must be a positive integer, got {limit!r}",
            details={"limit": limit},
        )
    return limit


def match_frames(
    attributes: FacialAttributes,
    catalog: Sequence[FrameProduct],
    limit: int = DEFAULT_LIMIT,
) -> List[FrameProduct]:
    """Rank the catalog against the attributes and return the best frames.

    Args:
        attributes: Facial attributes from the extractor
        catalog: Catalog snapshot, in ingestion order
        limit: Maximum number of frames to return, must be positive

    Returns:
        At most ``limit`` active frames, best match first

    Raises:
        InvalidLimitError: If limit is not a positive integer
    """
    limit = _validate_limit(limit)

    candidates = [
        ScoredCandidate(frame=frame, match_score=score_frame(attributes, frame), position=position)
        for position, frame in enumerate(catalog)
        if frame.is_active
    ]
    # sorted() is stable: ties keep catalog order
    ranked = sorted(candidates, key=lambda candidate: -candidate.match_score)

    logger.debug(
        "Ranked frame candidates",
        face_shape=attributes.face_shape,
        catalog_size=len(catalog),
        eligible=len(candidates),
        top_scores=[candidate.match_score for candidate in ranked[:limit]],
    )
    return [candidate.frame for candidate in ranked[:limit]]


class FrameMatchingService:
    """Service binding the matcher to a frame catalog.

    Example:
        ```python
        service = FrameMatchingService(catalog=uow.frames)
        frames = await service.search_frames(attributes, limit=5)
        ```
    """

    def __init__(self, catalog: FrameCatalog) -> None:
        """Initialize the frame matching service.

        Args:
            catalog: Read-only frame catalog
        """
        self.catalog = catalog

    async def search_frames(
        self,
        attributes: FacialAttributes,
        limit: int = DEFAULT_LIMIT,
    ) -> List[FrameProduct]:
        """Fetch the active catalog and rank it against the attributes.

        Raises:
            InvalidLimitError: If limit is not a positive integer
            CatalogError: If the catalog cannot be read
        """
        _validate_limit(limit)
        catalog = await self.catalog.fetch_active_catalog()
        frames = match_frames(attributes, catalog, limit)
        logger.info(
            "Matched frames",
            face_shape=attributes.face_shape,
            catalog_size=len(catalog),
            returned=len(frames),
        )
        return frames

    async def list_frames(self) -> List[FrameProduct]:
        """Return every active frame in catalog order."""
        return await self.catalog.fetch_active_catalog()

    async def get_frame(self, frame_id: str) -> FrameProduct:
        """Return a frame by id.

        Raises:
            FrameNotFoundError: If the frame does not exist
        """
        frame: Optional[FrameProduct] = await self.catalog.fetch_by_id(frame_id)
        if frame is None:
            raise FrameNotFoundError(f"Frame not found: {frame_id}", details={"frame_id": frame_id})
        return frame
