"""
App Store option vocabularies and canonical field maps.
"""

from types import MappingProxyType

from catalog_api.adapters.normalizer import field_map, truncated
from catalog_api.domain.models import Collection

# RSS feed names for the top-chart collections
COLLECTIONS = MappingProxyType({
    Collection.TOP_FREE: "topfreeapplications",
    Collection.TOP_PAID: "toppaidapplications",
    Collection.GROSSING: "topgrossingapplications",
})
DEFAULT_COLLECTION = COLLECTIONS[Collection.TOP_FREE]

# Customer reviews feed only honours a recency sort for the first page
REVIEWS_SORT = "mostrecent"
REVIEWS_PAGE = 1

# App Store genre ids
CATEGORIES = MappingProxyType({
    "BOOKS": 6018,
    "BUSINESS": 6000,
    "CATALOGS": 6022,
    "EDUCATION": 6017,
    "ENTERTAINMENT": 6016,
    "FINANCE": 6015,
    "FOOD_AND_DRINK": 6023,
    "GAMES": 6014,
    "GAMES_ACTION": 7001,
    "GAMES_ADVENTURE": 7002,
    "GAMES_ARCADE": 7003,
    "GAMES_BOARD": 7004,
    "GAMES_CARD": 7005,
    "GAMES_CASINO": 7006,
    "GAMES_DICE": 7007,
    "GAMES_EDUCATIONAL": 7008,
    "GAMES_FAMILY": 7009,
    "GAMES_MUSIC": 7011,
    "GAMES_PUZZLE": 7012,
    "GAMES_RACING": 7013,
    "GAMES_ROLE_PLAYING": 7014,
    "GAMES_SIMULATION": 7015,
    "GAMES_SPORTS": 7016,
    "GAMES_STRATEGY": 7017,
    "GAMES_TRIVIA": 7018,
    "GAMES_WORD": 7019,
    "HEALTH_AND_FITNESS": 6013,
    "LIFESTYLE": 6012,
    "MAGAZINES_AND_NEWSPAPERS": 6021,
    "MEDICAL": 6020,
    "MUSIC": 6011,
    "NAVIGATION": 6010,
    "NEWS": 6009,
    "PHOTO_AND_VIDEO": 6008,
    "PRODUCTIVITY": 6007,
    "REFERENCE": 6006,
    "SHOPPING": 6024,
    "SOCIAL_NETWORKING": 6005,
    "SPORTS": 6004,
    "TRAVEL": 6003,
    "UTILITIES": 6002,
    "WEATHER": 6001,
})

# X-Apple-Store-Front ids by country
STOREFRONTS = MappingProxyType({
    "ae": 143481, "ar": 143505, "at": 143445, "au": 143460, "be": 143446,
    "br": 143503, "ca": 143455, "ch": 143459, "cl": 143483, "cn": 143465,
    "co": 143501, "cz": 143489, "de": 143443, "dk": 143458, "eg": 143516,
    "es": 143454, "fi": 143447, "fr": 143442, "gb": 143444, "gr": 143448,
    "hk": 143463, "hu": 143482, "id": 143476, "ie": 143449, "il": 143491,
    "in": 143467, "it": 143450, "jp": 143462, "kr": 143466, "mx": 143468,
    "my": 143473, "ng": 143561, "nl": 143452, "no": 143457, "nz": 143461,
    "ph": 143474, "pk": 143477, "pl": 143478, "pt": 143453, "ro": 143487,
    "ru": 143469, "sa": 143479, "se": 143456, "sg": 143464, "th": 143475,
    "tr": 143480, "tw": 143470, "ua": 143492, "us": 143441, "vn": 143471,
    "za": 143472,
})
DEFAULT_STOREFRONT = STOREFRONTS["us"]

# Canonical field maps
SEARCH_FIELDS = field_map(
    id=("appId", "id"),
    title="title",
    developer="developer",
    score="score",
    ratings="reviews",
    price="price",
    free="free",
    icon="icon",
    url="url",
    description=truncated("description"),
    genre="primaryGenre",
)

DETAILS_FIELDS = field_map(
    id=("appId", "id"),
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
    genre="primaryGenre",
    released="released",
    updated="updated",
    version="version",
    histogram="histogram",
)

REVIEW_FIELDS = field_map(
    id="id",
    text="text",
    score="score",
    author="userName",
    date="date",
    title="title",
)

LIST_FIELDS = field_map(
    id=("appId", "id"),
    title="title",
    developer="developer",
    score="score",
    price="price",
    free="free",
    icon="icon",
    url="url",
)

SIMILAR_FIELDS = field_map(
    id=("appId", "id"),
    title="title",
    developer="developer",
    score="score",
    price="price",
    free="free",
    icon="icon",
)
