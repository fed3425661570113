"""Value objects package."""
from .matching import MatchFactor, ScoredCandidate

__all__ = ["MatchFactor", "ScoredCandidate"]
