from typing import Any, Dict, List, Optional

from catalog_api.adapters.android import tables
from catalog_api.adapters.android.client import PlayStoreClient
from catalog_api.adapters.interfaces.catalog import CatalogAdapter, Record, SIMILAR_RESULT_LIMIT
from catalog_api.adapters.normalizer import normalize_record, normalize_records
from catalog_api.domain.models import (
    DetailsQuery,
    ListQuery,
    Platform,
    ReviewsQuery,
    SearchQuery,
    SimilarQuery,
)


def resolve_category(category: Optional[str]) -> str:
    """Resolve a category key, forwarding unknown values as provider-native codes."""
    if category is None:
        return tables.DEFAULT_CATEGORY
    return tables.CATEGORIES.get(category, category)


class AndroidAdaptor(CatalogAdapter):
    """Catalog adaptor for Google Play."""

    platform = Platform.ANDROID

    def __init__(self, client: PlayStoreClient):
        self.client = client

    # Option translation

    def search_options(self, query: SearchQuery) -> Dict[str, Any]:
        return {"term": query.term, "num": query.num, "country": query.country}

    def details_options(self, query: DetailsQuery) -> Dict[str, Any]:
        return {"app_id": query.app_id, "country": query.country}

    def reviews_options(self, query: ReviewsQuery) -> Dict[str, Any]:
        return {
            "app_id": query.app_id,
            "country": query.country,
            "sort": tables.SORTS.get(query.sort, tables.DEFAULT_SORT),
            "num": query.num,
        }

    def list_options(self, query: ListQuery) -> Dict[str, Any]:
        return {
            "collection": tables.COLLECTIONS.get(query.collection, tables.DEFAULT_COLLECTION),
            "num": query.num,
            "country": query.country,
            "category": resolve_category(query.category),
        }

    def similar_options(self, query: SimilarQuery) -> Dict[str, Any]:
        return {"app_id": query.app_id, "country": query.country}

    # Operations

    async def search(self, query: SearchQuery) -> List[Record]:
        raw = await self.client.search(**self.search_options(query))
        return normalize_records(raw, tables.SEARCH_FIELDS, self.platform.value)

    async def details(self, query: DetailsQuery) -> Record:
        raw = await self.client.app(**self.details_options(query))
        return normalize_record(raw, tables.DETAILS_FIELDS, self.platform.value)

    async def reviews(self, query: ReviewsQuery) -> List[Record]:
        raw = await self.client.reviews(**self.reviews_options(query))
        return normalize_records(raw, tables.REVIEW_FIELDS, self.platform.value)

    async def list(self, query: ListQuery) -> List[Record]:
        raw = await self.client.list(**self.list_options(query))
        return normalize_records(raw, tables.LIST_FIELDS, self.platform.value, limit=query.num)

    async def similar(self, query: SimilarQuery) -> List[Record]:
        raw = await self.client.similar(**self.similar_options(query))
        return normalize_records(raw, tables.SIMILAR_FIELDS, self.platform.value, limit=SIMILAR_RESULT_LIMIT)

    async def aclose(self) -> None:
        await self.client.aclose()
