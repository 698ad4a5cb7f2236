"""
Pytest configuration and shared fixtures

Fake store clients stand in for the iTunes and Google Play clients so the real
adaptors, mapping tables, service and routes can be exercised without network
access.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from catalog_api.adapters.android import AndroidAdaptor
from catalog_api.adapters.ios import IosAdaptor
from catalog_api.adapters.registry import AdaptorRegistry
from catalog_api.main import create_application
from catalog_api.services.catalog_service import CatalogService

LONG_DESCRIPTION = "Forecasts, radar and severe weather alerts. " * 20


class FakeStoreClient:
    """Records every call and answers with canned raw records."""

    def __init__(self, responses: Optional[Dict[str, Any]] = None, error: Optional[Exception] = None):
        self.responses = responses or {}
        self.error = error
        self.calls: List[tuple] = []
        self.closed = False

    async def _respond(self, method: str, **kwargs) -> Any:
        self.calls.append((method, kwargs))
        if self.error is not None:
            raise self.error
        return self.responses.get(method, {} if method == "app" else [])

    async def search(self, **kwargs):
        return await self._respond("search", **kwargs)

    async def app(self, **kwargs):
        return await self._respond("app", **kwargs)

    async def reviews(self, **kwargs):
        return await self._respond("reviews", **kwargs)

    async def list(self, **kwargs):
        return await self._respond("list", **kwargs)

    async def similar(self, **kwargs):
        return await self._respond("similar", **kwargs)

    async def aclose(self):
        self.closed = True

    def last_call(self, method: str) -> Dict[str, Any]:
        for name, kwargs in reversed(self.calls):
            if name == method:
                return kwargs
        raise AssertionError(f"{method} was never called")


def _ios_app(index: int = 0, **overrides) -> Dict[str, Any]:
    app = {
        "id": 1000 + index,
        "appId": f"com.example.ios{index}",
        "title": f"iOS App {index}",
        "developer": "Example Inc.",
        "score": 4.5,
        "reviews": 1200 + index,
        "price": 0,
        "free": True,
        "icon": f"https://is1.mzstatic.com/icon{index}.png",
        "url": f"https://apps.apple.com/us/app/id{1000 + index}",
        "description": LONG_DESCRIPTION,
        "primaryGenre": "Weather",
        "released": "2015-03-01T08:00:00Z",
        "updated": "2024-05-20T07:00:00Z",
        "version": "5.2.1",
    }
    app.update(overrides)
    return app


def _android_app(index: int = 0, **overrides) -> Dict[str, Any]:
    app = {
        "appId": f"com.example.android{index}",
        "title": f"Android App {index}",
        "developer": "Example LLC",
        "score": 4.1,
        "ratings": 54000 + index,
        "reviews": 3100,
        "price": 0,
        "free": True,
        "icon": f"https://play-lh.googleusercontent.com/icon{index}",
        "url": f"https://play.google.com/store/apps/details?id=com.example.android{index}",
        "description": LONG_DESCRIPTION,
        "summary": "Accurate local forecasts",
        "genre": "Weather",
        "installs": "10,000,000+",
        "histogram": [100, 50, 200, 1000, 5000],
        "released": "Mar 1, 2015",
        "updated": 1716188400,
        "version": "7.0.3",
    }
    app.update(overrides)
    return app


@pytest.fixture
def ios_app():
    """Factory for raw iOS app records."""
    return _ios_app


@pytest.fixture
def android_app():
    """Factory for raw Android app records."""
    return _android_app


@pytest.fixture
def ios_review() -> Dict[str, Any]:
    return {
        "id": "9876543210",
        "userName": "rainy_day",
        "score": 2,
        "title": "Too many ads",
        "text": "The forecast is fine but the ads are constant.",
        "date": "2024-05-21T03:12:00-07:00",
        "version": "5.2.1",
    }


@pytest.fixture
def android_review() -> Dict[str, Any]:
    return {
        "reviewId": "gp:AOqpTOE",
        "userName": "Sam Doe",
        "content": "Works great offline.",
        "score": 5,
        "thumbsUpCount": 12,
        "at": datetime(2024, 5, 21, 10, 30, tzinfo=timezone.utc),
        "appVersion": "7.0.3",
    }


@pytest.fixture
def ios_client() -> FakeStoreClient:
    return FakeStoreClient()


@pytest.fixture
def android_client() -> FakeStoreClient:
    return FakeStoreClient()


@pytest.fixture
def registry(ios_client, android_client) -> AdaptorRegistry:
    registry = AdaptorRegistry()
    registry.register(IosAdaptor(ios_client))
    registry.register(AndroidAdaptor(android_client))
    return registry


@pytest.fixture
def catalog_service(registry) -> CatalogService:
    return CatalogService(registry)


@pytest.fixture
def api_client(registry) -> TestClient:
    """Test client for an application wired to the fake store clients."""
    return TestClient(create_application(registry=registry))
