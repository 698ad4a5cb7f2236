"""
Apple App Store adaptor package.
"""

from catalog_api.adapters.ios.adaptor import IosAdaptor
from catalog_api.adapters.ios.client import ITunesClient

__all__ = [
    "IosAdaptor",
    "ITunesClient",
]
