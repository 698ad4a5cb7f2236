import asyncio
import json
import logging
import re
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import parse_qs, urljoin, urlparse

import google_play_scraper
import httpx
from bs4 import BeautifulSoup
from google_play_scraper.exceptions import NotFoundError

from catalog_api.adapters.interfaces.catalog import SIMILAR_RESULT_LIMIT
from catalog_api.core.exceptions import ProviderError

logger = logging.getLogger(__name__)

PLAY_BASE_URL = "https://play.google.com"

# Section heading on a details page requested with hl=en
_SIMILAR_HEADING_PATTERN = re.compile(r"^\s*Similar apps\s*$", re.IGNORECASE)

# Top-chart request understood by the Play Store's batchexecute endpoint
_LIST_RPC_ID = "vyAe2"
_LIST_PAYLOAD_TEMPLATE = (
    "[[null,[[8,[20,{num}]],true,null,[64,1,195,71,8,72,9,10,11,139,12,16,145,148,150,151,152,27,30,31,96,"
    "32,34,163,100,165,104,169,108,110,113,55,56,57,122],[null,null,[[[true]],null,[[null,[]]],null,null,"
    "null,null,[null,2],null,null,null,null,null,null,[1]],[null,[[null,[]]],null,null,[true]],[null,[[null,"
    "[]]],null,[true]],[null,[[null,[]]]],null,null,null,null,[[[null,[]],null,[true]]],[[null,[[null,[]]],"
    "null,[true]]],[[null,[[null,[]]],null,[true]]]]],null,null,null,null,[[[null,[]],null,[true]]]],"
    "[{collection},9,null,{category}]]]"
)

# Positions of app fields inside one top-chart cluster item
_LIST_APPS_PATH = (0, 1, 0, 28, 0)
_LIST_APP_PATHS = {
    "appId": (0, 0, 0),
    "title": (0, 3),
    "icon": (0, 1, 3, 2),
    "developer": (0, 14),
    "currency": (0, 8, 1, 0, 1),
    "summary": (0, 13, 1),
    "score": (0, 4, 1),
}
_LIST_PRICE_PATH = (0, 8, 1, 0, 0)
_LIST_URL_PATH = (0, 10, 4, 2)


def _at(data: Any, path: Sequence[int]) -> Any:
    """Walk nested lists along path, returning None where the structure ends."""
    for index in path:
        if not isinstance(data, list) or index >= len(data):
            return None
        data = data[index]
    return data


def parse_batchexecute(body: str, rpc_id: str) -> Any:
    """
    Extract the decoded payload of one RPC from a batchexecute response.

    Raises:
        ProviderError: If the response does not carry the RPC payload
    """
    for line in body.splitlines():
        line = line.strip()
        if not line.startswith("["):
            continue
        try:
            chunk = json.loads(line)
        except json.JSONDecodeError:
            continue
        for entry in chunk:
            if isinstance(entry, list) and len(entry) > 2 and entry[0] == "wrb.fr" and entry[1] == rpc_id:
                return json.loads(entry[2]) if entry[2] else None
    raise ProviderError("Google Play returned a malformed response")


def parse_list_apps(payload: Any) -> List[Dict[str, Any]]:
    """Turn a decoded top-chart payload into app records."""
    items = _at(payload, _LIST_APPS_PATH) or []
    apps = []
    for item in items:
        app = {key: _at(item, path) for key, path in _LIST_APP_PATHS.items()}
        micros = _at(item, _LIST_PRICE_PATH)
        app["price"] = micros / 1000000 if isinstance(micros, (int, float)) else None
        app["free"] = micros == 0 if micros is not None else None
        url_path = _at(item, _LIST_URL_PATH)
        app["url"] = urljoin(PLAY_BASE_URL, url_path) if url_path else None
        apps.append(app)
    return apps


def extract_similar_ids(html: str, app_id: str) -> List[str]:
    """
    Collect the app ids listed in the "Similar apps" section of a details page.

    Links elsewhere on the page (developer's other apps, editorial picks) are
    ignored, as is the app itself.

    Returns:
        List[str]: Distinct package names in page order
    """
    soup = BeautifulSoup(html, "html.parser")
    ids = []
    for heading in soup.find_all(string=_SIMILAR_HEADING_PATTERN):
        section = heading.find_parent("section")
        if section is None:
            continue
        for link in section.select('a[href*="/store/apps/details?id="]'):
            found = parse_qs(urlparse(link["href"]).query).get("id", [None])[0]
            if found and found != app_id and found not in ids:
                ids.append(found)
    return ids


def details_url(app_id: str) -> str:
    return f"{PLAY_BASE_URL}/store/apps/details?id={app_id}"


class PlayStoreClient:
    """
    Client for Google Play catalog data.

    Search, details and reviews go through google_play_scraper, whose blocking
    calls run in a worker thread. Top charts and similar apps are read from the
    Play Store directly over HTTP.
    """

    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        base_url: str = PLAY_BASE_URL,
        lang: str = "en",
        timeout: float = 10.0
    ):
        """
        Initialize the Play Store client.

        Args:
            http_client: Optional shared HTTP client; one is created if omitted
            base_url: Play Store root
            lang: Store language code
            timeout: Request timeout in seconds for an owned client
        """
        self.base_url = base_url.rstrip("/")
        self.lang = lang
        self._owns_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)

    async def aclose(self) -> None:
        if self._owns_client:
            await self.http_client.aclose()

    async def search(self, term: str, num: int, country: str) -> List[Dict[str, Any]]:
        """
        Search Google Play.

        Args:
            term: Search term
            num: Maximum number of results
            country: Store country code

        Returns:
            List[Dict[str, Any]]: App records
        """
        results = await asyncio.to_thread(
            google_play_scraper.search, term, lang=self.lang, country=country, n_hits=num
        )
        for app in results:
            if app.get("appId") and not app.get("url"):
                app["url"] = details_url(app["appId"])
        return results

    async def app(self, app_id: str, country: str) -> Dict[str, Any]:
        """Fetch the full detail record of one app."""
        return await asyncio.to_thread(google_play_scraper.app, app_id, lang=self.lang, country=country)

    async def reviews(self, app_id: str, country: str, sort: int, num: int) -> List[Dict[str, Any]]:
        """
        Fetch one page of reviews.

        Args:
            app_id: Package name
            country: Store country code
            sort: Play Store sort code
            num: Number of reviews to fetch

        Returns:
            List[Dict[str, Any]]: Review records
        """
        result, _ = await asyncio.to_thread(
            google_play_scraper.reviews, app_id, lang=self.lang, country=country, sort=sort, count=num
        )
        return result

    async def list(self, collection: str, num: int, country: str, category: str) -> List[Dict[str, Any]]:
        """
        Fetch a top-chart collection.

        Args:
            collection: Play Store collection code (e.g. "topselling_free")
            num: Maximum number of apps
            country: Store country code
            category: Play Store category code

        Returns:
            List[Dict[str, Any]]: App records
        """
        payload = _LIST_PAYLOAD_TEMPLATE.format(
            num=int(num), collection=json.dumps(collection), category=json.dumps(category)
        )
        f_req = json.dumps([[[_LIST_RPC_ID, payload, None, "generic"]]])
        try:
            response = await self.http_client.post(
                f"{self.base_url}/_/PlayStoreUi/data/batchexecute",
                params={"rpcids": _LIST_RPC_ID, "source-path": "/store/apps", "hl": self.lang,
                        "gl": country, "authuser": "0", "rt": "c"},
                data={"f.req": f_req},
                headers={"Content-Type": "application/x-www-form-urlencoded;charset=UTF-8"},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error from Google Play top charts: {str(e)}")
            raise ProviderError(f"Google Play request failed ({e.response.status_code})",
                                status_code=e.response.status_code)
        except httpx.RequestError as e:
            logger.error(f"Request error contacting Google Play: {str(e)}")
            raise ProviderError(f"Failed to reach Google Play: {str(e)}")

        return parse_list_apps(parse_batchexecute(response.text, _LIST_RPC_ID))

    async def similar(self, app_id: str, country: str) -> List[Dict[str, Any]]:
        """
        Fetch the apps Google Play links as similar to an app.

        Args:
            app_id: Package name
            country: Store country code

        Returns:
            List[Dict[str, Any]]: Full records of at most SIMILAR_RESULT_LIMIT
            linked apps; links to apps no longer in the store are skipped
        """
        try:
            response = await self.http_client.get(
                f"{self.base_url}/store/apps/details",
                params={"id": app_id, "hl": "en", "gl": country},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                raise ProviderError("App not found (404)", status_code=404)
            raise ProviderError(f"Google Play request failed ({e.response.status_code})",
                                status_code=e.response.status_code)
        except httpx.RequestError as e:
            logger.error(f"Request error contacting Google Play: {str(e)}")
            raise ProviderError(f"Failed to reach Google Play: {str(e)}")

        similar_ids = extract_similar_ids(response.text, app_id)[:SIMILAR_RESULT_LIMIT]
        logger.debug(f"Found {len(similar_ids)} similar app ids for {app_id}")
        apps = await asyncio.gather(
            *(self.app(similar_id, country) for similar_id in similar_ids), return_exceptions=True
        )

        results = []
        for similar_id, app in zip(similar_ids, apps):
            if isinstance(app, NotFoundError):
                logger.warning(f"Skipping unavailable similar app {similar_id}")
            elif isinstance(app, BaseException):
                raise app
            else:
                results.append(app)
        return results
