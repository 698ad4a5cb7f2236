"""
Tests for the Google Play client with google_play_scraper patched out and a
mocked HTTP transport for the pages read directly.
"""

import json
from datetime import datetime

import google_play_scraper
import httpx
import pytest
from google_play_scraper.exceptions import NotFoundError

from catalog_api.adapters.android.client import (
    PlayStoreClient,
    extract_similar_ids,
    parse_batchexecute,
    parse_list_apps,
)
from catalog_api.core.exceptions import ProviderError


def _chart_item(app_id: str, micros: int) -> list:
    app = [None] * 15
    app[0] = [app_id]
    app[1] = [None, None, None, [None, None, f"https://play-lh.googleusercontent.com/{app_id}"]]
    app[3] = f"Title {app_id}"
    app[4] = ["4.4", 4.4]
    app[8] = [None, [[micros, "USD"]]]
    app[10] = [None, None, None, None, [None, None, f"/store/apps/details?id={app_id}"]]
    app[13] = [None, "Short summary"]
    app[14] = "Dev Studio"
    return [app]


def _chart_payload(items: list) -> list:
    cluster = [None] * 28 + [[items]]
    return [[None, [cluster]]]


def _batchexecute_body(payload) -> str:
    chunk = json.dumps([["wrb.fr", "vyAe2", json.dumps(payload), None, None, None, "generic"]])
    return f")]}}'\n\n{len(chunk)}\n{chunk}\n25\n[[\"e\",4,null,null,123]]\n"


def _client(handler=None) -> PlayStoreClient:
    handler = handler or (lambda request: httpx.Response(500))
    return PlayStoreClient(http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


@pytest.mark.asyncio
async def test_search_adds_details_url(monkeypatch):
    captured = {}

    def fake_search(term, lang, country, n_hits):
        captured.update(term=term, lang=lang, country=country, n_hits=n_hits)
        return [{"appId": "com.example.weather", "title": "Weather"}]

    monkeypatch.setattr(google_play_scraper, "search", fake_search)

    results = await _client().search(term="weather", num=5, country="us")

    assert captured == {"term": "weather", "lang": "en", "country": "us", "n_hits": 5}
    assert results[0]["url"] == "https://play.google.com/store/apps/details?id=com.example.weather"


@pytest.mark.asyncio
async def test_reviews_return_first_page(monkeypatch):
    captured = {}
    review = {"reviewId": "r1", "content": "ok", "at": datetime(2024, 1, 1)}

    def fake_reviews(app_id, lang, country, sort, count):
        captured.update(app_id=app_id, sort=sort, count=count)
        return [review], "continuation-token"

    monkeypatch.setattr(google_play_scraper, "reviews", fake_reviews)

    results = await _client().reviews(app_id="com.example", country="us", sort=3, num=40)

    assert results == [review]
    assert captured == {"app_id": "com.example", "sort": 3, "count": 40}


@pytest.mark.asyncio
async def test_app_errors_propagate(monkeypatch):
    def fake_app(app_id, lang, country):
        raise NotFoundError("App not found(404).")

    monkeypatch.setattr(google_play_scraper, "app", fake_app)

    with pytest.raises(NotFoundError):
        await _client().app(app_id="bad.id", country="us")


def test_parse_list_apps():
    payload = _chart_payload([_chart_item("com.free", 0), _chart_item("com.paid", 2990000)])

    apps = parse_list_apps(payload)

    assert apps[0] == {
        "appId": "com.free",
        "title": "Title com.free",
        "icon": "https://play-lh.googleusercontent.com/com.free",
        "developer": "Dev Studio",
        "currency": "USD",
        "summary": "Short summary",
        "score": 4.4,
        "price": 0.0,
        "free": True,
        "url": "https://play.google.com/store/apps/details?id=com.free",
    }
    assert apps[1]["price"] == pytest.approx(2.99)
    assert apps[1]["free"] is False


def test_parse_list_apps_without_cluster_is_empty():
    assert parse_list_apps(None) == []
    assert parse_list_apps([[None, []]]) == []


def test_parse_batchexecute_requires_rpc_payload():
    with pytest.raises(ProviderError):
        parse_batchexecute(")]}'\n\n[[\"e\",4]]\n", "vyAe2")


@pytest.mark.asyncio
async def test_list_posts_chart_request():
    seen = {}
    body = _batchexecute_body(_chart_payload([_chart_item("com.top", 0)]))

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        seen["form"] = request.content.decode()
        return httpx.Response(200, text=body)

    apps = await _client(handler).list(collection="topselling_paid", num=5, country="de", category="GAME")

    assert seen["path"] == "/_/PlayStoreUi/data/batchexecute"
    assert seen["params"]["rpcids"] == "vyAe2"
    assert seen["params"]["gl"] == "de"
    assert "topselling_paid" in seen["form"]
    assert "GAME" in seen["form"]
    assert [a["appId"] for a in apps] == ["com.top"]


@pytest.mark.asyncio
async def test_list_http_error():
    with pytest.raises(ProviderError) as exc_info:
        await _client().list(collection="topselling_free", num=5, country="us", category="APPLICATION")

    assert exc_info.value.status_code == 500


def _details_page(*sections) -> str:
    body = "".join(
        f'<section><header><h2><span>{heading}</span></h2></header><div>'
        + "".join(f'<a href="/store/apps/details?id={app_id}&amp;hl=en">{app_id}</a>' for app_id in ids)
        + "</div></section>"
        for heading, ids in sections
    )
    return f"<html><body>{body}</body></html>"


def test_extract_similar_ids_reads_only_the_similar_section():
    html = _details_page(
        ("More by Example Inc.", ["com.example.other"]),
        ("Similar apps", ["com.example.self", "com.other.one", "com.other.two", "com.other.one"]),
    )

    assert extract_similar_ids(html, "com.example.self") == ["com.other.one", "com.other.two"]


def test_extract_similar_ids_without_similar_section():
    html = _details_page(("More by Example Inc.", ["com.example.other"]))

    assert extract_similar_ids(html, "com.example.self") == []


@pytest.mark.asyncio
async def test_similar_hydrates_linked_apps(monkeypatch):
    html = _details_page(("Similar apps", ["com.other.one", "com.other.two"]))

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["id"] == "com.example.self"
        assert request.url.params["hl"] == "en"
        return httpx.Response(200, text=html)

    monkeypatch.setattr(google_play_scraper, "app", lambda app_id, lang, country: {"appId": app_id})

    apps = await _client(handler).similar(app_id="com.example.self", country="us")

    assert apps == [{"appId": "com.other.one"}, {"appId": "com.other.two"}]


@pytest.mark.asyncio
async def test_similar_hydrates_at_most_twenty_and_skips_missing_apps(monkeypatch):
    linked = [f"com.linked.app{i}" for i in range(45)]
    html = _details_page(("Similar apps", linked))
    hydrated = []

    def fake_app(app_id, lang, country):
        hydrated.append(app_id)
        if app_id == "com.linked.app3":
            raise NotFoundError("App not found(404).")
        return {"appId": app_id}

    monkeypatch.setattr(google_play_scraper, "app", fake_app)

    apps = await _client(lambda request: httpx.Response(200, text=html)).similar(app_id="com.example", country="us")

    assert sorted(hydrated) == sorted(linked[:20])
    assert [a["appId"] for a in apps] == [app_id for app_id in linked[:20] if app_id != "com.linked.app3"]


@pytest.mark.asyncio
async def test_similar_propagates_other_hydration_failures(monkeypatch):
    html = _details_page(("Similar apps", ["com.other.one"]))

    def fake_app(app_id, lang, country):
        raise RuntimeError("connection reset")

    monkeypatch.setattr(google_play_scraper, "app", fake_app)

    with pytest.raises(RuntimeError, match="connection reset"):
        await _client(lambda request: httpx.Response(200, text=html)).similar(app_id="com.example", country="us")


@pytest.mark.asyncio
async def test_similar_unknown_app():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404)

    with pytest.raises(ProviderError, match="App not found"):
        await _client(handler).similar(app_id="bad.id", country="us")
