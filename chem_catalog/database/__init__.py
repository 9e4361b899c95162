"""
Database package for the chemical/product catalog.

This package provides:
- SQLAlchemy ORM model for persisted record collections
- Connection and session management
- Key-value storage used to persist appended records

Quick start:
    from chem_catalog.database import DatabaseManager, CatalogStorage

    db = DatabaseManager("data/catalog_store.db")
    storage = CatalogStorage(db)
    storage.persist(RecordKind.CHEMICAL, [chemical.to_dict() for chemical in chemicals])
"""

from .connection import DatabaseManager, create_test_db
from .models import Base, StoredCollection
from .storage import CatalogStorage


__all__ = [
    "DatabaseManager",
    "create_test_db",
    "Base",
    "StoredCollection",
    "CatalogStorage",
]
