"""
Services package for the App Catalog API.

This package contains the parameter translator and the catalog service that
orchestrates each operation, coordinating between request schemas, queries and
the platform adaptors. Services depend on the adaptor interface rather than on
concrete store clients.
"""

from catalog_api.services.catalog_service import CatalogService
from catalog_api.services.translator import ParameterTranslator

__all__ = [
    "CatalogService",
    "ParameterTranslator",
]
