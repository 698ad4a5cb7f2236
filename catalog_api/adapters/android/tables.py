"""
Google Play option vocabularies and canonical field maps.
"""

from datetime import datetime, timezone
from enum import IntEnum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from catalog_api.adapters.normalizer import field_map, truncated
from catalog_api.domain.models import Collection, ReviewSort


class PlaySort(IntEnum):
    """Review sort codes understood by the Play Store."""
    HELPFULNESS = 1
    NEWEST = 2
    RATING = 3


SORTS = MappingProxyType({
    ReviewSort.RECENT: PlaySort.NEWEST,
    ReviewSort.HELPFUL: PlaySort.HELPFULNESS,
    ReviewSort.RATING: PlaySort.RATING,
})
DEFAULT_SORT = PlaySort.NEWEST

COLLECTIONS = MappingProxyType({
    Collection.TOP_FREE: "topselling_free",
    Collection.TOP_PAID: "topselling_paid",
    Collection.GROSSING: "topgrossing",
})
DEFAULT_COLLECTION = COLLECTIONS[Collection.TOP_FREE]

DEFAULT_CATEGORY = "APPLICATION"

# Play Store category codes are their own symbolic names
CATEGORIES = MappingProxyType({name: name for name in (
    "APPLICATION", "ANDROID_WEAR", "ART_AND_DESIGN", "AUTO_AND_VEHICLES", "BEAUTY",
    "BOOKS_AND_REFERENCE", "BUSINESS", "COMICS", "COMMUNICATION", "DATING",
    "EDUCATION", "ENTERTAINMENT", "EVENTS", "FINANCE", "FOOD_AND_DRINK",
    "HEALTH_AND_FITNESS", "HOUSE_AND_HOME", "LIBRARIES_AND_DEMO", "LIFESTYLE",
    "MAPS_AND_NAVIGATION", "MEDICAL", "MUSIC_AND_AUDIO", "NEWS_AND_MAGAZINES",
    "PARENTING", "PERSONALIZATION", "PHOTOGRAPHY", "PRODUCTIVITY", "SHOPPING",
    "SOCIAL", "SPORTS", "TOOLS", "TRAVEL_AND_LOCAL", "VIDEO_PLAYERS", "WATCH_FACE",
    "WEATHER", "GAME", "GAME_ACTION", "GAME_ADVENTURE", "GAME_ARCADE", "GAME_BOARD",
    "GAME_CARD", "GAME_CASINO", "GAME_CASUAL", "GAME_EDUCATIONAL", "GAME_MUSIC",
    "GAME_PUZZLE", "GAME_RACING", "GAME_ROLE_PLAYING", "GAME_SIMULATION",
    "GAME_SPORTS", "GAME_STRATEGY", "GAME_TRIVIA", "GAME_WORD", "FAMILY",
)})


def _histogram(raw: Mapping[str, Any]) -> Optional[Dict[str, int]]:
    # The scraper returns star counts as a list ordered from one to five stars
    histogram = raw.get("histogram")
    if isinstance(histogram, (list, tuple)):
        return {str(star): count for star, count in enumerate(histogram, start=1)}
    return histogram


def _updated(raw: Mapping[str, Any]) -> Any:
    updated = raw.get("updated")
    if isinstance(updated, (int, float)) and not isinstance(updated, bool):
        return datetime.fromtimestamp(updated, tz=timezone.utc)
    return updated


# Canonical field maps
SEARCH_FIELDS = field_map(
    id="appId",
    title="title",
    developer="developer",
    score="score",
    ratings="ratings",
    price="price",
    free="free",
    icon="icon",
    url="url",
    description=truncated(("summary", "description")),
    genre="genre",
)

DETAILS_FIELDS = field_map(
    id="appId",
    title="title",
    developer="developer",
    score="score",
    ratings="ratings",
    reviews="reviews",
    price="price",
    free="free",
    icon="icon",
    url="url",
    description="description",
    genre="genre",
    released="released",
    updated=_updated,
    version="version",
    installs="installs",
    histogram=_histogram,
)

REVIEW_FIELDS = field_map(
    id="reviewId",
    text="content",
    score="score",
    author="userName",
    date="at",
    thumbsUp="thumbsUpCount",
)

LIST_FIELDS = field_map(
    id="appId",
    title="title",
    developer="developer",
    score="score",
    price="price",
    free="free",
    icon="icon",
    url="url",
)

SIMILAR_FIELDS = field_map(
    id="appId",
    title="title",
    developer="developer",
    score="score",
    price="price",
    free="free",
    icon="icon",
)
