from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class Platform(str, Enum):
    """App store platforms the API can dispatch to."""
    IOS = "ios"
    ANDROID = "android"

    @classmethod
    def resolve(cls, value: Any) -> "Platform":
        """
        Resolve a caller-supplied platform value.

        Anything other than a recognised platform name, including a missing
        value, resolves to iOS.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.IOS


class ReviewSort(str, Enum):
    """Symbolic review sort keys."""
    RECENT = "recent"
    HELPFUL = "helpful"
    RATING = "rating"


class Collection(str, Enum):
    """Symbolic top-chart collection keys."""
    TOP_FREE = "top_free"
    TOP_PAID = "top_paid"
    GROSSING = "grossing"


@dataclass(frozen=True)
class SearchQuery:
    """Translated search request."""
    term: str
    platform: Platform
    country: str
    num: int


@dataclass(frozen=True)
class DetailsQuery:
    """Translated app details request."""
    app_id: str
    platform: Platform
    country: str


@dataclass(frozen=True)
class ReviewsQuery:
    """Translated reviews request."""
    app_id: str
    platform: Platform
    country: str
    num: int
    sort: ReviewSort


@dataclass(frozen=True)
class ListQuery:
    """Translated top-chart listing request."""
    platform: Platform
    country: str
    num: int
    collection: Collection
    category: Optional[str] = None


@dataclass(frozen=True)
class SimilarQuery:
    """Translated similar-apps request."""
    app_id: str
    platform: Platform
    country: str
