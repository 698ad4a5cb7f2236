"""
Interfaces package for the catalog adapters.

This package contains the abstract base interface every platform adapter
implements, so the service layer depends on the contract rather than on a
particular store.
"""

from .catalog import CatalogAdapter, Record, SIMILAR_RESULT_LIMIT

__all__ = [
    'CatalogAdapter',
    'Record',
    'SIMILAR_RESULT_LIMIT',
]
