"""Frame matching value objects."""
from dataclasses import dataclass
from typing import Callable

from app.domain.entities.analysis import FacialAttributes
from app.domain.entities.frame import FrameProduct


@dataclass(frozen=True)
class MatchFactor:
    """One row of the scoring table.

    ``weight`` is a callable so that graded factors (stock depth) can share the
    same fold as all-or-nothing ones; flat factors return a constant.
    """
    name: str
    applies: Callable[[FacialAttributes, FrameProduct], bool]
    weight: Callable[[FrameProduct], float]


@dataclass(frozen=True)
class ScoredCandidate:
    """A catalog frame paired with its score during a single match call."""
    frame: FrameProduct
    match_score: float
    position: int
