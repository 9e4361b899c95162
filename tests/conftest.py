"""
Pytest configuration and shared fixtures for catalog tests.

Provides:
- Sample chemical / product records
- Catalog stores and linking engines built over them
- In-memory SQLite storage
- Seed JSON files in a temporary directory
"""

import json
import pytest
from pathlib import Path
from typing import Generator, List

from chem_catalog.catalog.models import Chemical, Product
from chem_catalog.catalog.store import CatalogStore
from chem_catalog.database import CatalogStorage, DatabaseManager, create_test_db
from chem_catalog.linking.engine import LinkingEngine
from tests.fixtures.test_data import (
    SAMPLE_CHEMICALS,
    SAMPLE_PRODUCTS,
    SCENARIO_CHEMICALS,
    SCENARIO_PRODUCTS,
)


# ============================================================================
# RECORD FIXTURES
# ============================================================================

@pytest.fixture
def sample_chemicals() -> List[Chemical]:
    return [Chemical.from_dict(d) for d in SAMPLE_CHEMICALS]


@pytest.fixture
def sample_products() -> List[Product]:
    return [Product.from_dict(d) for d in SAMPLE_PRODUCTS]


# ============================================================================
# STORE / ENGINE FIXTURES
# ============================================================================

@pytest.fixture
def store(sample_chemicals, sample_products) -> CatalogStore:
    """Store over the sample catalog, without persistence."""
    return CatalogStore(sample_chemicals, sample_products)


@pytest.fixture
def engine(store) -> LinkingEngine:
    return LinkingEngine(store)


@pytest.fixture
def scenario_engine() -> LinkingEngine:
    """Engine over the one-chemical, two-soap scenario."""
    store = CatalogStore(
        [Chemical.from_dict(d) for d in SCENARIO_CHEMICALS],
        [Product.from_dict(d) for d in SCENARIO_PRODUCTS],
    )
    return LinkingEngine(store)


# ============================================================================
# STORAGE FIXTURES
# ============================================================================

@pytest.fixture
def test_db() -> Generator[DatabaseManager, None, None]:
    """Fresh in-memory database for each test."""
    db = create_test_db()
    yield db
    db.close()


@pytest.fixture
def storage(test_db) -> CatalogStorage:
    return CatalogStorage(test_db)


@pytest.fixture
def seed_files(tmp_path) -> Path:
    """Write the sample catalog as seed JSON files; returns the directory."""
    (tmp_path / "chemicals.json").write_text(json.dumps(SAMPLE_CHEMICALS), encoding="utf-8")
    (tmp_path / "products.json").write_text(json.dumps(SAMPLE_PRODUCTS), encoding="utf-8")
    return tmp_path
