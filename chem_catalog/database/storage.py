"""
Key-value persistence for catalog collections.

Stores each record collection as a JSON array under its collection key
("chemicals", "products"), mirroring browser local storage. Used as the
catalog store's persistence collaborator and as a load source.
"""

import json
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from chem_catalog.catalog.exceptions import PersistenceFailure, SourceUnavailable
from chem_catalog.catalog.models import RecordKind
from .connection import DatabaseManager
from .models import StoredCollection

logger = logging.getLogger(__name__)


class CatalogStorage:
    """
    SQLite-backed storage for whole record collections.

    Each ``persist`` call replaces the stored collection for that kind.
    """

    def __init__(self, db: DatabaseManager):
        """
        Initialize storage.

        Args:
            db: DatabaseManager whose tables already exist or will be created
        """
        self.db = db
        self.db.create_all_tables()

    def persist(self, kind: RecordKind, records: List[Dict[str, Any]]) -> None:
        """
        Store a full collection under its key.

        Args:
            kind: Collection to write
            records: JSON-ready records

        Raises:
            PersistenceFailure: If the records cannot be serialized or written
        """
        try:
            payload = json.dumps(records, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise PersistenceFailure(f"Cannot serialize {kind.value}: {e}") from e

        try:
            with self.db.session_scope() as session:
                stored = session.get(StoredCollection, kind.value)
                if stored is None:
                    stored = StoredCollection(key=kind.value)
                    session.add(stored)
                stored.payload = payload
                stored.record_count = len(records)
                stored.updated_at = datetime.utcnow()
        except SQLAlchemyError as e:
            logger.error(f"Error saving {kind.value}: {e}")
            raise PersistenceFailure(f"Cannot save {kind.value}: {e}") from e

        logger.info(f"Data saved to storage with key: {kind.value} ({len(records)} records)")

    def load(self, kind: RecordKind) -> Optional[List[Dict[str, Any]]]:
        """
        Read a stored collection.

        Returns:
            Stored records, or None if the key was never written

        Raises:
            SourceUnavailable: If the database or payload is unreadable
        """
        try:
            with self.db.session_scope() as session:
                stored = session.get(StoredCollection, kind.value)
                payload = stored.payload if stored is not None else None
        except SQLAlchemyError as e:
            raise SourceUnavailable(f"Cannot read stored {kind.value}: {e}") from e

        if payload is None:
            return None

        try:
            data = json.loads(payload)
        except json.JSONDecodeError as e:
            raise SourceUnavailable(f"Stored {kind.value} is not valid JSON: {e}") from e

        if not isinstance(data, list):
            raise SourceUnavailable(f"Stored {kind.value} is not a list")
        return data

    def clear(self, kind: RecordKind) -> bool:
        """
        Delete a stored collection.

        Returns:
            True if a collection was removed
        """
        with self.db.session_scope() as session:
            stored = session.get(StoredCollection, kind.value)
            if stored is None:
                return False
            session.delete(stored)
        logger.info(f"Cleared stored {kind.value}")
        return True

    def stored_keys(self) -> List[str]:
        with self.db.session_scope() as session:
            return list(session.scalars(select(StoredCollection.key).order_by(StoredCollection.key)))
