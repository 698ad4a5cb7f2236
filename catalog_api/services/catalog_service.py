import logging
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar

from catalog_api.adapters.interfaces.catalog import CatalogAdapter
from catalog_api.adapters.registry import AdaptorRegistry
from catalog_api.core.exceptions import APIException, UpstreamError, ValidationError
from catalog_api.core.result import Result
from catalog_api.domain.schemas import (
    DetailsRequest,
    ListRequest,
    ReviewsRequest,
    SearchRequest,
    SimilarRequest,
)
from catalog_api.services.translator import ParameterTranslator

logger = logging.getLogger(__name__)

Envelope = Dict[str, Any]
Q = TypeVar("Q")


class CatalogService:
    """
    Runs catalog operations across platforms.

    Every operation translates the request, dispatches to the platform's
    adaptor and wraps the canonical records in the operation's envelope.
    Failures come back as a failed Result rather than an exception.
    """

    def __init__(self, registry: AdaptorRegistry, translator: Optional[ParameterTranslator] = None):
        """Initialize with the adaptor registry and parameter translator."""
        self.registry = registry
        self.translator = translator or ParameterTranslator()

    async def _run(
        self,
        operation: str,
        translate: Callable[[], Q],
        call: Callable[[CatalogAdapter, Q], Awaitable[Envelope]]
    ) -> Result[Envelope]:
        try:
            query = translate()
        except ValidationError as e:
            logger.warning(f"{operation.capitalize()} request rejected: {e.detail}")
            return Result.fail(e)

        try:
            adaptor = self.registry.resolve(query.platform)
            envelope = await call(adaptor, query)
        except APIException as e:
            logger.warning(f"{operation.capitalize()} request rejected: {e.detail}")
            return Result.fail(e)
        except Exception as e:
            logger.error(f"{operation.capitalize()} error: {str(e)}", extra={"data": {"operation": operation}})
            return Result.fail(UpstreamError.from_exception(operation, e))

        return Result.ok(envelope)

    async def search(self, request: SearchRequest) -> Result[Envelope]:
        """Searches apps by term."""
        async def call(adaptor, query):
            results = await adaptor.search(query)
            return {
                "query": query.term,
                "platform": query.platform.value,
                "country": query.country,
                "results": results,
            }
        return await self._run("search", lambda: self.translator.search(request), call)

    async def details(self, request: DetailsRequest) -> Result[Envelope]:
        """Gets the full details of one app."""
        async def call(adaptor, query):
            return {"result": await adaptor.details(query)}
        return await self._run("details", lambda: self.translator.details(request), call)

    async def reviews(self, request: ReviewsRequest) -> Result[Envelope]:
        """Gets one page of reviews for an app."""
        async def call(adaptor, query):
            results = await adaptor.reviews(query)
            return {
                "appId": query.app_id,
                "platform": query.platform.value,
                "country": query.country,
                "results": results,
            }
        return await self._run("reviews", lambda: self.translator.reviews(request), call)

    async def list(self, request: ListRequest) -> Result[Envelope]:
        """Gets a top-chart collection."""
        async def call(adaptor, query):
            results = await adaptor.list(query)
            return {
                "collection": query.collection.value,
                "platform": query.platform.value,
                "country": query.country,
                "results": results,
            }
        return await self._run("list", lambda: self.translator.list(request), call)

    async def similar(self, request: SimilarRequest) -> Result[Envelope]:
        """Gets apps similar to an app."""
        async def call(adaptor, query):
            results = await adaptor.similar(query)
            return {
                "appId": query.app_id,
                "platform": query.platform.value,
                "results": results,
            }
        return await self._run("similar", lambda: self.translator.similar(request), call)

    def platforms(self):
        """Lists the platforms the service can dispatch to."""
        return self.registry.list()
