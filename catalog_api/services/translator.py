"""
Parameter translation from request bodies to per-operation queries.

The translator validates required fields, applies defaults and clamps page
sizes. It never talks to an upstream; platform-specific option vocabularies
are resolved later by each catalog adapter.
"""

from typing import Any, Optional

from catalog_api.core.exceptions import ValidationError
from catalog_api.domain.models import (
    Collection,
    DetailsQuery,
    ListQuery,
    Platform,
    ReviewSort,
    ReviewsQuery,
    SearchQuery,
    SimilarQuery,
)
from catalog_api.domain.schemas import (
    DetailsRequest,
    ListRequest,
    ReviewsRequest,
    SearchRequest,
    SimilarRequest,
)

# Page size defaults and ceilings per operation
SEARCH_DEFAULT_NUM = 10
SEARCH_MAX_NUM = 50
REVIEWS_DEFAULT_NUM = 50
REVIEWS_MAX_NUM = 100
LIST_DEFAULT_NUM = 20
LIST_MAX_NUM = 100


def clamp_num(num: Optional[int], default: int, ceiling: int) -> int:
    """Clamp a requested page size into [1, ceiling]."""
    if num is None:
        num = default
    return max(1, min(num, ceiling))


def _required(value: Any, field: str) -> str:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError.required(field)
    return str(value).strip()


def _symbol(enum_cls, value: Optional[str], fallback):
    try:
        return enum_cls(value)
    except ValueError:
        return fallback


class ParameterTranslator:
    """Turns validated request bodies into operation queries."""

    def __init__(self, default_country: str = "us"):
        self.default_country = default_country

    def _country(self, value: Optional[str]) -> str:
        return value.strip() if value and value.strip() else self.default_country

    def search(self, request: SearchRequest) -> SearchQuery:
        return SearchQuery(
            term=_required(request.term, "term"),
            platform=Platform.resolve(request.platform),
            country=self._country(request.country),
            num=clamp_num(request.num, SEARCH_DEFAULT_NUM, SEARCH_MAX_NUM),
        )

    def details(self, request: DetailsRequest) -> DetailsQuery:
        return DetailsQuery(
            app_id=_required(request.app_id, "appId"),
            platform=Platform.resolve(request.platform),
            country=self._country(request.country),
        )

    def reviews(self, request: ReviewsRequest) -> ReviewsQuery:
        return ReviewsQuery(
            app_id=_required(request.app_id, "appId"),
            platform=Platform.resolve(request.platform),
            country=self._country(request.country),
            num=clamp_num(request.num, REVIEWS_DEFAULT_NUM, REVIEWS_MAX_NUM),
            sort=_symbol(ReviewSort, request.sort, ReviewSort.RECENT),
        )

    def list(self, request: ListRequest) -> ListQuery:
        category = request.category
        if isinstance(category, str):
            category = category.strip() or None
        return ListQuery(
            platform=Platform.resolve(request.platform),
            country=self._country(request.country),
            num=clamp_num(request.num, LIST_DEFAULT_NUM, LIST_MAX_NUM),
            collection=_symbol(Collection, request.collection, Collection.TOP_FREE),
            category=str(category) if category is not None else None,
        )

    def similar(self, request: SimilarRequest) -> SimilarQuery:
        return SimilarQuery(
            app_id=_required(request.app_id, "appId"),
            platform=Platform.resolve(request.platform),
            country=self._country(request.country),
        )
