"""
Google Play adaptor package.
"""

from catalog_api.adapters.android.adaptor import AndroidAdaptor
from catalog_api.adapters.android.client import PlayStoreClient

__all__ = [
    "AndroidAdaptor",
    "PlayStoreClient",
]
