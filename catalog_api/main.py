from contextlib import asynccontextmanager
from typing import Callable, Optional
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from catalog_api.adapters.factory import AdaptorFactory
from catalog_api.adapters.registry import AdaptorRegistry
from catalog_api.api.error_handlers import register_exception_handlers
from catalog_api.api.routes.catalog import catalog_router
from catalog_api.api.routes.health import health_router
from catalog_api.core.config import get_settings, load_env_file
from catalog_api.core.logging import configure_logging, get_logger, set_correlation_id
from catalog_api.services.catalog_service import CatalogService
from catalog_api.services.translator import ParameterTranslator


# Load environment variables and configure logging early
load_env_file()
configure_logging()
logger = get_logger(__name__)


def create_application(registry: Optional[AdaptorRegistry] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        registry: Prebuilt adaptor registry; when omitted the real store
                  adaptors are built at start-up and closed at shutdown

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    settings = get_settings()
    translator = ParameterTranslator(default_country=settings.DEFAULT_COUNTRY)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting up App Catalog API")
        factory = None
        if getattr(app.state, "catalog_service", None) is None:
            factory = AdaptorFactory(settings)
            app.state.catalog_service = CatalogService(factory.create_registry(), translator)
        try:
            yield
        finally:
            logger.info("Shutting down App Catalog API")
            if factory is not None:
                await factory.aclose()
                app.state.catalog_service = None

    app = FastAPI(
        title=settings.PROJECT_NAME,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    if registry is not None:
        app.state.catalog_service = CatalogService(registry, translator)

    # Register middleware
    configure_middleware(app)

    # Register exception handlers
    register_exception_handlers(app)

    # Register routers
    register_routers(app)

    return app


def configure_middleware(app: FastAPI) -> None:
    """
    Configure middleware components for the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    settings = get_settings()

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def track_request(request: Request, call_next: Callable):
        correlation_id = set_correlation_id(request.headers.get("X-Correlation-ID"))
        started = time.perf_counter()

        response = await call_next(request)
        response.headers["X-Correlation-ID"] = correlation_id

        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} in {elapsed_ms}ms",
            extra={"data": {"path": request.url.path, "status_code": response.status_code, "elapsed_ms": elapsed_ms}}
        )
        return response


def register_routers(app: FastAPI) -> None:
    """
    Register API routers with the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    settings = get_settings()

    app.include_router(health_router, tags=["Health"])
    app.include_router(catalog_router, prefix=settings.API_PREFIX, tags=["Catalog"])


app = create_application()


def run() -> None:
    """Serve the application with uvicorn on the configured host and port."""
    import uvicorn

    settings = get_settings()
    logger.info(f"Scraper API running on port {settings.PORT}")
    uvicorn.run("catalog_api.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)


if __name__ == "__main__":
    run()
