"""
Adapters package for the App Catalog API.

This package contains components for integrating with the app-store providers, including:
- The abstract catalog adaptor interface
- Concrete iOS and Android adaptors with their option and field-mapping tables
- The factory and registry that build and dispatch to adaptor instances
"""

# Import the interfaces subpackage to make it available
from . import interfaces

# Import core adaptor components
from .factory import AdaptorFactory
from .registry import AdaptorRegistry

__all__ = [
    'interfaces',
    'AdaptorFactory',
    'AdaptorRegistry',
]
