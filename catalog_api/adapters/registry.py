import logging
from typing import Any, Dict, List, Optional

from catalog_api.adapters.interfaces.catalog import CatalogAdapter
from catalog_api.domain.models import Platform

logger = logging.getLogger(__name__)


class AdaptorRegistry:
    """
    Registry of constructed catalog adapters keyed by platform.
    Resolves a caller's platform discriminator to exactly one adapter,
    falling back to the default platform for anything unrecognised.
    """

    def __init__(self, default_platform: Platform = Platform.IOS):
        """
        Initialize an empty adaptor registry.

        Args:
            default_platform: Platform used when a lookup cannot be matched
        """
        self._adaptors: Dict[Platform, CatalogAdapter] = {}
        self.default_platform = default_platform
        logger.debug("Initialized AdaptorRegistry")

    def register(self, adaptor: CatalogAdapter) -> None:
        """
        Register an adaptor instance under its platform.

        Args:
            adaptor: Constructed catalog adaptor

        Raises:
            ValueError: If the adaptor is invalid or its platform is already registered
        """
        if not isinstance(adaptor, CatalogAdapter):
            raise ValueError("Adaptor must be an instance of CatalogAdapter")

        platform = Platform(adaptor.platform)
        if platform in self._adaptors:
            raise ValueError(f"Adaptor for platform '{platform.value}' is already registered")

        self._adaptors[platform] = adaptor
        logger.info(f"Registered adaptor for platform: {platform.value}")

    def get(self, platform: Any) -> Optional[CatalogAdapter]:
        """
        Retrieve the adaptor registered for a platform, if any.

        Args:
            platform: Platform or platform name

        Returns:
            The adaptor if registered, None otherwise
        """
        return self._adaptors.get(Platform.resolve(platform))

    def resolve(self, platform: Any) -> CatalogAdapter:
        """
        Retrieve the adaptor for a caller-supplied platform value.

        Unrecognised or missing values dispatch to the default platform.

        Args:
            platform: Raw platform discriminator

        Returns:
            CatalogAdapter: Adaptor to serve the request

        Raises:
            LookupError: If neither the platform nor the default is registered
        """
        adaptor = self.get(platform) or self._adaptors.get(self.default_platform)
        if adaptor is None:
            raise LookupError(f"No adaptor registered for platform '{platform}'")
        return adaptor

    def list(self) -> List[str]:
        """
        List all registered platforms.

        Returns:
            List of registered platform names
        """
        return [platform.value for platform in self._adaptors]

    def is_registered(self, platform: Any) -> bool:
        return Platform.resolve(platform) in self._adaptors

    async def aclose(self) -> None:
        """Close every registered adaptor."""
        for adaptor in self._adaptors.values():
            await adaptor.aclose()
