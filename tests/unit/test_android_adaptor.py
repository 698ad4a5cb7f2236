"""
Tests for the Google Play adaptor: option translation and field mapping.
"""

import pytest

from catalog_api.adapters.android import AndroidAdaptor
from catalog_api.adapters.android.adaptor import resolve_category
from catalog_api.adapters.android.tables import PlaySort
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
from tests.conftest import FakeStoreClient

ANDROID = Platform.ANDROID


@pytest.mark.asyncio
async def test_search_prefers_summary_then_truncated_description(android_app):
    client = FakeStoreClient({"search": [android_app(0), android_app(1, summary=None)]})
    adaptor = AndroidAdaptor(client)

    results = await adaptor.search(SearchQuery(term="weather", platform=ANDROID, country="us", num=5))

    with_summary, without_summary = results
    assert with_summary["description"] == "Accurate local forecasts"
    assert len(without_summary["description"]) == 200
    assert with_summary["id"] == "com.example.android0"
    assert with_summary["ratings"] == 54000
    assert with_summary["genre"] == "Weather"
    assert with_summary["platform"] == "android"


@pytest.mark.asyncio
async def test_details_keeps_android_only_fields(android_app):
    raw = android_app(0)
    client = FakeStoreClient({"app": raw})
    adaptor = AndroidAdaptor(client)

    result = await adaptor.details(DetailsQuery(app_id="com.example.android0", platform=ANDROID, country="us"))

    assert client.last_call("app") == {"app_id": "com.example.android0", "country": "us"}
    assert result["description"] == raw["description"]
    assert result["installs"] == "10,000,000+"
    assert result["ratings"] == 54000
    assert result["reviews"] == 3100
    assert result["histogram"] == {"1": 100, "2": 50, "3": 200, "4": 1000, "5": 5000}
    assert result["updated"] == "2024-05-20T07:00:00+00:00"
    assert result["platform"] == "android"


@pytest.mark.asyncio
@pytest.mark.parametrize("sort, expected", [
    (ReviewSort.RECENT, PlaySort.NEWEST),
    (ReviewSort.HELPFUL, PlaySort.HELPFULNESS),
    (ReviewSort.RATING, PlaySort.RATING),
])
async def test_reviews_translate_sort_and_num(android_review, sort, expected):
    client = FakeStoreClient({"reviews": [android_review]})
    adaptor = AndroidAdaptor(client)

    results = await adaptor.reviews(ReviewsQuery(
        app_id="com.example.android0", platform=ANDROID, country="us", num=100, sort=sort
    ))

    call = client.last_call("reviews")
    assert call["sort"] == expected
    assert call["num"] == 100
    assert results == [{
        "id": "gp:AOqpTOE",
        "text": "Works great offline.",
        "score": 5,
        "author": "Sam Doe",
        "date": "2024-05-21T10:30:00+00:00",
        "thumbsUp": 12,
        "platform": "android",
    }]


@pytest.mark.asyncio
async def test_list_forwards_unknown_category_as_is(android_app):
    client = FakeStoreClient({"list": [android_app(i) for i in range(8)]})
    adaptor = AndroidAdaptor(client)

    results = await adaptor.list(ListQuery(
        platform=ANDROID, country="us", num=5, collection=Collection.TOP_PAID, category="GAME_EXPERIMENTAL"
    ))

    assert client.last_call("list") == {
        "collection": "topselling_paid", "num": 5, "country": "us", "category": "GAME_EXPERIMENTAL",
    }
    assert len(results) == 5
    assert "genre" not in results[0]


def test_resolve_category():
    assert resolve_category(None) == "APPLICATION"
    assert resolve_category("WEATHER") == "WEATHER"
    assert resolve_category("custom_code") == "custom_code"


@pytest.mark.asyncio
async def test_similar_truncated_to_twenty(android_app):
    client = FakeStoreClient({"similar": [android_app(i) for i in range(40)]})
    adaptor = AndroidAdaptor(client)

    results = await adaptor.similar(SimilarQuery(app_id="com.example.android0", platform=ANDROID, country="us"))

    assert client.last_call("similar") == {"app_id": "com.example.android0", "country": "us"}
    assert len(results) == 20
    assert all(r["platform"] == "android" for r in results)
