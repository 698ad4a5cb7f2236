import json
import logging
import re
from typing import Any, Dict, List, Mapping, Optional, Union

import httpx
from bs4 import BeautifulSoup

from catalog_api.adapters.ios.tables import DEFAULT_STOREFRONT, STOREFRONTS
from catalog_api.core.exceptions import ProviderError

logger = logging.getLogger(__name__)

ITUNES_BASE_URL = "https://itunes.apple.com"

_SIMILAR_IDS_PATTERN = re.compile(r'customersAlsoBoughtApps"\s*:\s*(\[[^\]]*\])')
_DIGITS_PATTERN = re.compile(r"\d[\d,]*")


def _label(entry: Mapping[str, Any], key: str) -> Optional[str]:
    node = entry.get(key)
    if isinstance(node, Mapping):
        return node.get("label")
    return None


def _attributes(entry: Mapping[str, Any], key: str) -> Dict[str, Any]:
    node = entry.get(key)
    if isinstance(node, list):
        node = node[0] if node else {}
    if isinstance(node, Mapping):
        return node.get("attributes", {})
    return {}


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def clean_app(app: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Reshape an iTunes Search/Lookup result into an app record.

    Args:
        app: Raw result item from the iTunes API

    Returns:
        Dict[str, Any]: App record keyed the way the iOS field maps expect
    """
    price = app.get("price")
    return {
        "id": app.get("trackId"),
        "appId": app.get("bundleId"),
        "title": app.get("trackName"),
        "url": app.get("trackViewUrl"),
        "description": app.get("description"),
        "icon": app.get("artworkUrl512") or app.get("artworkUrl100") or app.get("artworkUrl60"),
        "genres": app.get("genres"),
        "genreIds": app.get("genreIds"),
        "primaryGenre": app.get("primaryGenreName"),
        "primaryGenreId": app.get("primaryGenreId"),
        "contentRating": app.get("contentAdvisoryRating"),
        "released": app.get("releaseDate"),
        "updated": app.get("currentVersionReleaseDate") or app.get("releaseDate"),
        "releaseNotes": app.get("releaseNotes"),
        "version": app.get("version"),
        "price": price,
        "currency": app.get("currency"),
        "free": price == 0 if price is not None else None,
        "developerId": app.get("artistId"),
        "developer": app.get("artistName"),
        "developerUrl": app.get("artistViewUrl"),
        "score": app.get("averageUserRating"),
        "reviews": app.get("userRatingCount"),
        "currentVersionScore": app.get("averageUserRatingForCurrentVersion"),
        "currentVersionReviews": app.get("userRatingCountForCurrentVersion"),
    }


def clean_list_entry(entry: Mapping[str, Any]) -> Dict[str, Any]:
    """Reshape a top-chart RSS entry into an app record."""
    id_attrs = _attributes(entry, "id")
    price_attrs = _attributes(entry, "im:price")
    amount = price_attrs.get("amount")
    price = float(amount) if amount is not None else None
    images = _as_list(entry.get("im:image"))
    return {
        "id": id_attrs.get("im:id"),
        "appId": id_attrs.get("im:bundleId"),
        "title": _label(entry, "im:name"),
        "icon": images[-1].get("label") if images else None,
        "url": _attributes(entry, "link").get("href"),
        "price": price,
        "currency": price_attrs.get("currency"),
        "free": price == 0 if price is not None else None,
        "description": _label(entry, "summary"),
        "developer": _label(entry, "im:artist"),
        "developerUrl": _attributes(entry, "im:artist").get("href"),
        "genre": _attributes(entry, "category").get("label"),
        "genreId": _attributes(entry, "category").get("im:id"),
        "released": _label(entry, "im:releaseDate"),
    }


def clean_review_entry(entry: Mapping[str, Any]) -> Dict[str, Any]:
    """Reshape a customer-reviews RSS entry into a review record."""
    rating = _label(entry, "im:rating")
    author = entry.get("author") or {}
    return {
        "id": _label(entry, "id"),
        "userName": _label(author, "name"),
        "userUrl": _label(author, "uri"),
        "version": _label(entry, "im:version"),
        "score": int(rating) if rating is not None else None,
        "title": _label(entry, "title"),
        "text": _label(entry, "content"),
        "url": _attributes(entry, "link").get("href"),
        "date": _label(entry, "updated"),
    }


def parse_ratings(html: str) -> Dict[str, Any]:
    """
    Parse the rating count and star histogram out of a customer-reviews page.

    Returns:
        Dict[str, Any]: {"ratings": int, "histogram": {5: n, ..., 1: n}}
    """
    soup = BeautifulSoup(html, "html.parser")

    count_node = soup.select_one(".rating-count")
    ratings = _count(count_node.get_text()) if count_node else 0

    # One .vote row per star level, five stars first
    totals = [_count(node.get_text()) for node in soup.select(".vote .total")][:5]
    histogram = {str(5 - index): total for index, total in enumerate(totals)}
    return {"ratings": ratings, "histogram": histogram}


def _count(text: str) -> int:
    digits = _DIGITS_PATTERN.search(text)
    return int(digits.group(0).replace(",", "")) if digits else 0


class ITunesClient:
    """Async client for the public iTunes Search, Lookup and RSS endpoints."""

    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        base_url: str = ITUNES_BASE_URL,
        timeout: float = 10.0
    ):
        """
        Initialize the iTunes client.

        Args:
            http_client: Optional shared HTTP client; one is created if omitted
            base_url: iTunes API root
            timeout: Request timeout in seconds for an owned client
        """
        self.base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)

    async def aclose(self) -> None:
        if self._owns_client:
            await self.http_client.aclose()

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None,
                   headers: Optional[Dict[str, str]] = None) -> httpx.Response:
        url = f"{self.base_url}{path}"
        try:
            response = await self.http_client.get(url, params=params, headers=headers)
            response.raise_for_status()
            return response
        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error from iTunes for {path}: {str(e)}")
            raise ProviderError(f"App Store request failed ({e.response.status_code})",
                                status_code=e.response.status_code)
        except httpx.RequestError as e:
            logger.error(f"Request error contacting iTunes for {path}: {str(e)}")
            raise ProviderError(f"Failed to reach the App Store: {str(e)}")

    async def _get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        response = await self._get(path, params=params)
        try:
            return response.json()
        except (json.JSONDecodeError, ValueError):
            raise ProviderError("App Store returned a malformed response")

    async def lookup(self, ids: List[Union[str, int]], country: str) -> List[Dict[str, Any]]:
        """Look up apps by numeric track id."""
        if not ids:
            return []
        data = await self._get_json("/lookup", params={
            "id": ",".join(str(i) for i in ids),
            "country": country,
            "entity": "software",
        })
        return [clean_app(item) for item in data.get("results", [])]

    async def _lookup_one(self, app_id: str, country: str) -> Dict[str, Any]:
        key = "id" if str(app_id).isdigit() else "bundleId"
        data = await self._get_json("/lookup", params={key: app_id, "country": country, "entity": "software"})
        results = data.get("results", [])
        if not results:
            raise ProviderError("App not found (404)", status_code=404)
        return clean_app(results[0])

    async def resolve_track_id(self, app_id: str, country: str) -> str:
        """Return the numeric track id for a track id or bundle id."""
        if str(app_id).isdigit():
            return str(app_id)
        app = await self._lookup_one(app_id, country)
        return str(app["id"])

    async def search(self, term: str, num: int, country: str) -> List[Dict[str, Any]]:
        """
        Search the App Store.

        Args:
            term: Search term
            num: Maximum number of results
            country: Store country code

        Returns:
            List[Dict[str, Any]]: App records
        """
        data = await self._get_json("/search", params={
            "term": term,
            "country": country,
            "media": "software",
            "entity": "software",
            "limit": num,
        })
        return [clean_app(item) for item in data.get("results", [])]

    async def app(self, app_id: str, country: str, ratings: bool = False) -> Dict[str, Any]:
        """
        Fetch one app by track id or bundle id.

        Args:
            app_id: Numeric track id or bundle id
            country: Store country code
            ratings: Also fetch the rating count and star histogram

        Returns:
            Dict[str, Any]: App record

        Raises:
            ProviderError: If the app does not exist or the store call fails
        """
        app = await self._lookup_one(app_id, country)
        if ratings:
            app.update(await self.ratings(str(app["id"]), country))
        return app

    async def ratings(self, track_id: str, country: str) -> Dict[str, Any]:
        """Fetch the rating aggregation for a numeric track id."""
        storefront = STOREFRONTS.get(country.lower(), DEFAULT_STOREFRONT)
        response = await self._get(
            f"/{country}/customer-reviews/id{track_id}",
            params={"displayable-kind": 11},
            headers={"X-Apple-Store-Front": f"{storefront},12"},
        )
        if not response.text:
            raise ProviderError("App not found (404)", status_code=404)
        return parse_ratings(response.text)

    async def reviews(self, app_id: str, country: str, sort: str, page: int) -> List[Dict[str, Any]]:
        """
        Fetch one page of the customer-reviews RSS feed.

        Args:
            app_id: Numeric track id or bundle id
            country: Store country code
            sort: Feed sort name (e.g. "mostrecent")
            page: Feed page, starting at 1

        Returns:
            List[Dict[str, Any]]: Review records
        """
        track_id = await self.resolve_track_id(app_id, country)
        data = await self._get_json(f"/{country}/rss/customerreviews/page={page}/id={track_id}/sortby={sort}/json")
        entries = _as_list(data.get("feed", {}).get("entry"))
        # The first entry of a page can be the app itself rather than a review
        return [clean_review_entry(entry) for entry in entries if "im:rating" in entry]

    async def list(self, collection: str, num: int, country: str,
                   category: Optional[int] = None) -> List[Dict[str, Any]]:
        """
        Fetch a top-chart RSS feed.

        Args:
            collection: Feed name (e.g. "topfreeapplications")
            num: Maximum number of entries
            country: Store country code
            category: Optional genre id

        Returns:
            List[Dict[str, Any]]: App records
        """
        genre = f"/genre={category}" if category is not None else ""
        data = await self._get_json(f"/{country}/rss/{collection}/limit={num}{genre}/json")
        entries = _as_list(data.get("feed", {}).get("entry"))
        return [clean_list_entry(entry) for entry in entries]

    async def similar(self, app_id: str, country: str) -> List[Dict[str, Any]]:
        """
        Fetch the "customers also bought" apps of an app.

        Args:
            app_id: Numeric track id or bundle id
            country: Store country code

        Returns:
            List[Dict[str, Any]]: App records, empty when the page lists none
        """
        track_id = await self.resolve_track_id(app_id, country)
        storefront = STOREFRONTS.get(country.lower(), DEFAULT_STOREFRONT)
        response = await self._get(
            f"/{country}/app/app/id{track_id}",
            headers={"X-Apple-Store-Front": f"{storefront},32"},
        )
        match = _SIMILAR_IDS_PATTERN.search(response.text)
        if not match:
            return []
        try:
            ids = json.loads(match.group(1))
        except json.JSONDecodeError:
            raise ProviderError("App Store returned a malformed similar apps list")
        return await self.lookup(ids, country)
