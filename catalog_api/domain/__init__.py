"""
Domain package for the App Catalog API.

This package contains the request schemas and per-operation query models that
flow between the HTTP layer, the parameter translator and the catalog adapters.
It has no knowledge of any particular app store.
"""

from catalog_api.domain.models import (
    Platform,
    SearchQuery,
    DetailsQuery,
    ReviewsQuery,
    ListQuery,
    SimilarQuery,
)

__all__ = [
    "Platform",
    "SearchQuery",
    "DetailsQuery",
    "ReviewsQuery",
    "ListQuery",
    "SimilarQuery",
]
