"""
Tests for SQLite-backed collection storage.

Tests:
- Persist / load round trip per collection key
- Overwrite semantics
- Unreadable payload handling
- Clearing collections
"""

import pytest
from unittest.mock import patch
from sqlalchemy.exc import OperationalError

from chem_catalog.catalog.exceptions import PersistenceFailure, SourceUnavailable
from chem_catalog.catalog.models import RecordKind
from chem_catalog.database import DatabaseManager, StoredCollection
from tests.fixtures.test_data import SAMPLE_CHEMICALS, SAMPLE_PRODUCTS


class TestCatalogStorage:
    def test_load_missing_key_returns_none(self, storage):
        assert storage.load(RecordKind.CHEMICAL) is None

    def test_round_trip(self, storage):
        storage.persist(RecordKind.CHEMICAL, SAMPLE_CHEMICALS)
        storage.persist(RecordKind.PRODUCT, SAMPLE_PRODUCTS)

        assert storage.load(RecordKind.CHEMICAL) == SAMPLE_CHEMICALS
        assert storage.load(RecordKind.PRODUCT) == SAMPLE_PRODUCTS
        assert storage.stored_keys() == ["chemicals", "products"]

    def test_persist_replaces_collection(self, storage):
        storage.persist(RecordKind.PRODUCT, SAMPLE_PRODUCTS)
        storage.persist(RecordKind.PRODUCT, SAMPLE_PRODUCTS[:1])

        assert storage.load(RecordKind.PRODUCT) == SAMPLE_PRODUCTS[:1]
        with storage.db.session_scope() as session:
            stored = session.get(StoredCollection, "products")
            assert stored.record_count == 1

    def test_empty_collection_is_not_missing(self, storage):
        storage.persist(RecordKind.CHEMICAL, [])
        assert storage.load(RecordKind.CHEMICAL) == []

    def test_unicode_payload(self, storage):
        records = [{"name": "Éthanol", "type": "Solvant"}]
        storage.persist(RecordKind.CHEMICAL, records)
        assert storage.load(RecordKind.CHEMICAL) == records

    def test_unserializable_records(self, storage):
        with pytest.raises(PersistenceFailure):
            storage.persist(RecordKind.CHEMICAL, [{"name": object()}])

    def test_database_error_becomes_persistence_failure(self, storage):
        with patch.object(storage.db, "session_scope",
                          side_effect=OperationalError("stmt", {}, Exception("locked"))):
            with pytest.raises(PersistenceFailure):
                storage.persist(RecordKind.PRODUCT, SAMPLE_PRODUCTS)

    def test_corrupt_payload(self, storage):
        with storage.db.session_scope() as session:
            session.add(StoredCollection(key="products", payload="{not json", record_count=0))
        with pytest.raises(SourceUnavailable):
            storage.load(RecordKind.PRODUCT)

    def test_non_list_payload(self, storage):
        with storage.db.session_scope() as session:
            session.add(StoredCollection(key="chemicals", payload='{"a": 1}', record_count=0))
        with pytest.raises(SourceUnavailable):
            storage.load(RecordKind.CHEMICAL)

    def test_clear(self, storage):
        storage.persist(RecordKind.PRODUCT, SAMPLE_PRODUCTS)
        assert storage.clear(RecordKind.PRODUCT) is True
        assert storage.load(RecordKind.PRODUCT) is None
        assert storage.clear(RecordKind.PRODUCT) is False


class TestDatabaseManager:
    def test_file_database_persists_between_managers(self, tmp_path):
        db_path = str(tmp_path / "nested" / "store.db")

        from chem_catalog.database import CatalogStorage
        first = DatabaseManager(db_path)
        CatalogStorage(first).persist(RecordKind.CHEMICAL, SAMPLE_CHEMICALS[:2])
        first.close()

        second = DatabaseManager(db_path)
        try:
            assert CatalogStorage(second).load(RecordKind.CHEMICAL) == SAMPLE_CHEMICALS[:2]
        finally:
            second.close()

    def test_session_scope_rolls_back_on_error(self, test_db):
        with pytest.raises(RuntimeError):
            with test_db.session_scope() as session:
                session.add(StoredCollection(key="products", payload="[]", record_count=0))
                raise RuntimeError("boom")

        with test_db.session_scope() as session:
            assert session.get(StoredCollection, "products") is None
