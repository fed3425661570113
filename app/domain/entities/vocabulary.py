"""Closed vocabularies shared by the attribute extractor and the frame catalog.

Tokens are compared exactly and case-sensitively. ``parse`` returns ``None``
for a token outside the vocabulary so that callers can treat it as unknown
instead of failing.
"""
from enum import Enum
from typing import Iterable, List, Optional, Type, TypeVar

V = TypeVar("V", bound="Vocabulary")


class Vocabulary(str, Enum):
    """Base class for enumerated attribute tokens."""

    @classmethod
    def parse(cls: Type[V], token: object) -> Optional[V]:
        """Return the member whose value equals ``token``, or None if unknown."""
        for member in cls:
            if member.value == token:
                return member
        return None

    @classmethod
    def values(cls) -> List[str]:
        """List the raw token strings of the vocabulary."""
        return [member.value for member in cls]

    @classmethod
    def known(cls: Type[V], tokens: Iterable[object]) -> List[V]:
        """Keep only the tokens that belong to the vocabulary, in input order."""
        members = (cls.parse(token) for token in tokens)
        return [member for member in members if member is not None]


class FaceShape(Vocabulary):
    OVAL = "oval"
    ROUND = "round"
    SQUARE = "square"
    HEART = "heart"
    DIAMOND = "diamond"
    OBLONG = "oblong"


class FrameSize(Vocabulary):
    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"


class FrameColor(Vocabulary):
    BLACK = "Black"
    BLUE = "Blue"
    GOLD = "Gold"
    TORTOISE = "Tortoise"


class FrameStyle(Vocabulary):
    AVIATOR = "Aviator"
    CAT_EYE = "Cat-eye"
    RECTANGLE = "Rectangle"
    ROUND = "Round"
    SQUARE = "Square"


class StockStatus(Vocabulary):
    IN_STOCK = "in_stock"
    LOW_STOCK = "low_stock"
    OUT_OF_STOCK = "out_of_stock"
    ORDER_ONLY = "order_only"
