from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from catalog_api import __version__
from catalog_api.api.dependencies import get_catalog_service
from catalog_api.core.config import get_settings
from catalog_api.services.catalog_service import CatalogService

health_router = APIRouter()


class ServiceBanner(BaseModel):
    status: str = "ok"
    message: str


class PlatformHealth(BaseModel):
    """Liveness plus the store platforms requests can be dispatched to."""
    status: str = "ok"
    version: str = __version__
    service: str
    platforms: List[str]


@health_router.get("/", response_model=ServiceBanner, summary="Service banner")
async def banner() -> ServiceBanner:
    return ServiceBanner(message=get_settings().PROJECT_NAME)


@health_router.get("/health", response_model=PlatformHealth, summary="Health check with registered platforms")
async def health(catalog_service: CatalogService = Depends(get_catalog_service)) -> PlatformHealth:
    """
    Report liveness and the platforms the catalog service can serve.

    Args:
        catalog_service: Catalog service dependency

    Returns:
        PlatformHealth: Status, version, service name and platform list
    """
    return PlatformHealth(service=get_settings().PROJECT_NAME, platforms=catalog_service.platforms())
