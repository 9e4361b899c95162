"""
Catalog records and the session store.

Provides the Chemical / Product record types, the store owning the two
collections, and the exceptions raised by the add-record flow.
"""

from chem_catalog.catalog.exceptions import (
    CatalogError,
    CatalogWriteError,
    PersistenceFailure,
    SourceUnavailable,
    ValidationFailure,
)
from chem_catalog.catalog.models import Chemical, Product, RecordKind
from chem_catalog.catalog.store import CatalogStore, REQUIRED_FIELDS

__all__ = [
    "CatalogError",
    "CatalogWriteError",
    "PersistenceFailure",
    "SourceUnavailable",
    "ValidationFailure",
    "Chemical",
    "Product",
    "RecordKind",
    "CatalogStore",
    "REQUIRED_FIELDS",
]
