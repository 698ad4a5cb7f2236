from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends

from catalog_api.api.dependencies import get_catalog_service
from catalog_api.domain.schemas import (
    DetailsRequest,
    ListRequest,
    ReviewsRequest,
    SearchRequest,
    SimilarRequest,
)
from catalog_api.services.catalog_service import CatalogService

catalog_router = APIRouter()


@catalog_router.post("/search", summary="Search apps")
async def search_apps(
    payload: Optional[SearchRequest] = None,
    catalog_service: CatalogService = Depends(get_catalog_service)
) -> Dict[str, Any]:
    """Searches apps by term."""
    result = await catalog_service.search(payload or SearchRequest())
    return result.unwrap()


@catalog_router.post("/details", summary="Get app details")
async def get_app_details(
    payload: Optional[DetailsRequest] = None,
    catalog_service: CatalogService = Depends(get_catalog_service)
) -> Dict[str, Any]:
    """Gets full details of one app."""
    result = await catalog_service.details(payload or DetailsRequest())
    return result.unwrap()


@catalog_router.post("/reviews", summary="Get app reviews")
async def get_app_reviews(
    payload: Optional[ReviewsRequest] = None,
    catalog_service: CatalogService = Depends(get_catalog_service)
) -> Dict[str, Any]:
    """Gets one page of reviews for an app."""
    result = await catalog_service.reviews(payload or ReviewsRequest())
    return result.unwrap()


@catalog_router.post("/list", summary="List top apps")
async def list_top_apps(
    payload: Optional[ListRequest] = None,
    catalog_service: CatalogService = Depends(get_catalog_service)
) -> Dict[str, Any]:
    """Gets a top-chart collection."""
    result = await catalog_service.list(payload or ListRequest())
    return result.unwrap()


@catalog_router.post("/similar", summary="Get similar apps")
async def get_similar_apps(
    payload: Optional[SimilarRequest] = None,
    catalog_service: CatalogService = Depends(get_catalog_service)
) -> Dict[str, Any]:
    """Gets apps similar to an app."""
    result = await catalog_service.similar(payload or SimilarRequest())
    return result.unwrap()
