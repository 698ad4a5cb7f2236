from fastapi import Request

from catalog_api.core.logging import get_logger
from catalog_api.services.catalog_service import CatalogService

# Initialize logger
logger = get_logger(__name__)


async def get_catalog_service(request: Request) -> CatalogService:
    """
    Dependency for providing the catalog service.

    The service and its adaptors are built once when the application starts
    and kept on the application state.

    Args:
        request: Incoming request

    Returns:
        CatalogService: The application's catalog service

    Raises:
        RuntimeError: If the application was started without a catalog service
    """
    service = getattr(request.app.state, "catalog_service", None)
    if service is None:
        logger.error("Catalog service requested before application start-up completed")
        raise RuntimeError("Catalog service is not initialized")
    return service
