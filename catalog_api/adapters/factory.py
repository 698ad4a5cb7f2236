import logging
from typing import Optional

import httpx

from catalog_api.adapters.android import AndroidAdaptor, PlayStoreClient
from catalog_api.adapters.ios import IosAdaptor, ITunesClient
from catalog_api.adapters.registry import AdaptorRegistry
from catalog_api.core.config import Settings, get_settings
from catalog_api.domain.models import Platform

logger = logging.getLogger(__name__)


class AdaptorFactory:
    """
    Factory for creating the catalog adaptors.
    Builds one adaptor per supported platform around a shared HTTP client
    and registers them for dispatch.
    """

    def __init__(self, settings: Optional[Settings] = None, http_client: Optional[httpx.AsyncClient] = None):
        """
        Initialize the adaptor factory.

        Args:
            settings: Application settings; the cached settings are used if omitted
            http_client: Optional HTTP client shared by the store clients
        """
        self.settings = settings or get_settings()
        self.http_client = http_client
        logger.info("Initialized AdaptorFactory")

    def _http_client(self) -> httpx.AsyncClient:
        if self.http_client is None:
            self.http_client = httpx.AsyncClient(
                timeout=self.settings.DEFAULT_TIMEOUT,
                follow_redirects=True,
                headers={"User-Agent": f"{self.settings.PROJECT_NAME}/1.0"},
            )
        return self.http_client

    def create_ios_adaptor(self) -> IosAdaptor:
        return IosAdaptor(ITunesClient(http_client=self._http_client()))

    def create_android_adaptor(self) -> AndroidAdaptor:
        return AndroidAdaptor(PlayStoreClient(http_client=self._http_client(), lang=self.settings.DEFAULT_LANG))

    def create_registry(self) -> AdaptorRegistry:
        """
        Create a registry holding an adaptor for every supported platform.

        Returns:
            AdaptorRegistry: Registry defaulting to the iOS adaptor
        """
        registry = AdaptorRegistry(default_platform=Platform.IOS)
        registry.register(self.create_ios_adaptor())
        registry.register(self.create_android_adaptor())
        logger.info(f"Created catalog adaptors for platforms: {', '.join(registry.list())}")
        return registry

    async def aclose(self) -> None:
        """Close the shared HTTP client."""
        if self.http_client is not None:
            await self.http_client.aclose()
            self.http_client = None
