from abc import ABC, abstractmethod
from typing import Any, Dict, List

from catalog_api.domain.models import (
    DetailsQuery,
    ListQuery,
    Platform,
    ReviewsQuery,
    SearchQuery,
    SimilarQuery,
)

# Canonical records are plain JSON-ready dictionaries
Record = Dict[str, Any]

SIMILAR_RESULT_LIMIT = 20


class CatalogAdapter(ABC):
    """
    Abstract base interface for app-store catalog adapters.

    Each implementation owns one platform: it translates queries into the
    provider's option vocabulary, calls the provider client and maps the raw
    response onto canonical records tagged with its platform.
    """

    platform: Platform

    @abstractmethod
    async def search(self, query: SearchQuery) -> List[Record]:
        """
        Search the store by term.

        Args:
            query: Translated search query

        Returns:
            List[Record]: Canonical app summaries with truncated descriptions
        """
        pass

    @abstractmethod
    async def details(self, query: DetailsQuery) -> Record:
        """
        Fetch the full detail record of one app.

        Args:
            query: Translated details query

        Returns:
            Record: Canonical app detail
        """
        pass

    @abstractmethod
    async def reviews(self, query: ReviewsQuery) -> List[Record]:
        """
        Fetch one page of user reviews for an app.

        Args:
            query: Translated reviews query

        Returns:
            List[Record]: Canonical reviews
        """
        pass

    @abstractmethod
    async def list(self, query: ListQuery) -> List[Record]:
        """
        Fetch a top-chart collection, optionally within a category.

        Args:
            query: Translated listing query

        Returns:
            List[Record]: At most query.num canonical app summaries
        """
        pass

    @abstractmethod
    async def similar(self, query: SimilarQuery) -> List[Record]:
        """
        Fetch apps the store considers similar to an app.

        Args:
            query: Translated similar-apps query

        Returns:
            List[Record]: At most SIMILAR_RESULT_LIMIT canonical app summaries
        """
        pass

    async def aclose(self) -> None:
        """Release any resources held by the provider client."""
        return None
