"""
Session wiring for the catalog.

Loads both collections once, builds the store with storage attached, and
threads that single store into the linking engine. Query pipelines are
stateless and shared.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from chem_catalog.catalog.loader import CatalogLoader
from chem_catalog.catalog.models import Chemical, Product
from chem_catalog.catalog.store import CatalogStore
from chem_catalog.database import CatalogStorage, DatabaseManager
from chem_catalog.linking.engine import LinkingEngine
from chem_catalog.linking.types import ScoringConfig
from chem_catalog.query.pipeline import CHEMICAL_QUERY, PRODUCT_QUERY, QueryPipeline
from chem_catalog.utils.config_manager import ConfigManager

_logger = logging.getLogger(__name__)


@dataclass
class CatalogSession:
    """Everything a caller needs for one browsing session."""
    store: CatalogStore
    engine: LinkingEngine
    config: ConfigManager
    storage: Optional[CatalogStorage] = None
    chemical_query: QueryPipeline = field(default=CHEMICAL_QUERY)
    product_query: QueryPipeline = field(default=PRODUCT_QUERY)

    def search_chemicals(self, term: str = "", sort_key: Optional[str] = None) -> List[Chemical]:
        return self.chemical_query.filter_and_sort(self.store.chemicals, term, sort_key)

    def search_products(self, term: str = "", sort_key: Optional[str] = None) -> List[Product]:
        return self.product_query.filter_and_sort(self.store.products, term, sort_key)

    def close(self) -> None:
        if self.storage is not None:
            self.storage.db.close()


def _resolve(base_path: Path, source: Optional[str]) -> Optional[str]:
    """Resolve a relative file source against the project root; URLs pass through."""
    if not source or source.lower().startswith(("http://", "https://")) or source == ":memory:":
        return source
    path = Path(source)
    return str(path if path.is_absolute() else base_path / path)


def build_session(
    config: Optional[ConfigManager] = None,
    base_path: Optional[str] = None,
    db_manager: Optional[DatabaseManager] = None,
    use_storage: bool = True,
) -> CatalogSession:
    """
    Build a CatalogSession from configuration.

    Args:
        config: ConfigManager (defaults if None)
        base_path: Project root for resolving relative paths
        db_manager: Existing DatabaseManager (created from config if None)
        use_storage: If False, records are neither read from nor saved to storage

    Returns:
        Fully-wired CatalogSession
    """
    config = config or ConfigManager()
    if base_path is None:
        # default: one level up from chem_catalog/
        base_path = str(Path(__file__).resolve().parent.parent)
    root = Path(base_path)

    storage = None
    if use_storage:
        if db_manager is None:
            db_manager = DatabaseManager(_resolve(root, config.get_data_param('storage_path')))
        storage = CatalogStorage(db_manager)

    loader = CatalogLoader(
        chemicals_source=_resolve(root, config.get_data_param('chemicals_source')),
        products_source=_resolve(root, config.get_data_param('products_source')),
        storage=storage,
        timeout=int(config.get_data_param('request_timeout')),
    )
    chemicals, products = loader.load_all()

    store = CatalogStore(chemicals, products, persistence=storage)
    engine = LinkingEngine(store, ScoringConfig.from_config(config.get_all_config()))
    _logger.info("Catalog session ready: %r", store)

    return CatalogSession(store=store, engine=engine, config=config, storage=storage)
