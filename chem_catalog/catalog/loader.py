"""
Catalog loader: reads the chemical and product collections for a session.

Sources may be local JSON files or HTTP(S) URLs. A collection previously
written to storage takes precedence over its seed source. Any failure
yields an empty collection so the session always starts with well-typed
data.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import requests
from loguru import logger

from chem_catalog.catalog.exceptions import SourceUnavailable, ValidationFailure
from chem_catalog.catalog.models import Chemical, Product, RecordKind, RECORD_TYPES
from chem_catalog.database.storage import CatalogStorage

Source = Union[str, Path]


def _is_url(source: Source) -> bool:
    return isinstance(source, str) and source.lower().startswith(("http://", "https://"))


class CatalogLoader:
    """
    Loads both record collections from storage or their seed sources.

    Provides:
    - Local file and HTTP(S) sources
    - Stored collections overriding seed data
    - Failure isolation (a failed kind loads as empty)
    """

    def __init__(
        self,
        chemicals_source: Optional[Source] = None,
        products_source: Optional[Source] = None,
        storage: Optional[CatalogStorage] = None,
        timeout: int = 10,
        prefer_storage: bool = True,
    ):
        """
        Initialize the loader.

        Args:
            chemicals_source: Path or URL of the chemicals JSON array
            products_source: Path or URL of the products JSON array
            storage: Stored collections to check first (optional)
            timeout: HTTP request timeout in seconds
            prefer_storage: If False, always read the seed sources
        """
        self.sources: Dict[RecordKind, Optional[Source]] = {
            RecordKind.CHEMICAL: chemicals_source,
            RecordKind.PRODUCT: products_source,
        }
        self.storage = storage
        self.timeout = timeout
        self.prefer_storage = prefer_storage

    def load_all(self) -> Tuple[List[Chemical], List[Product]]:
        """
        Load both collections.

        Returns:
            (chemicals, products); either may be empty if its source failed
        """
        chemicals = self.load(RecordKind.CHEMICAL)
        products = self.load(RecordKind.PRODUCT)
        logger.info(f"Loaded {len(chemicals)} chemicals and {len(products)} products")
        return chemicals, products

    def load(self, kind: RecordKind) -> List[Any]:
        """Load one collection as records, never raising."""
        try:
            raw = self._load_raw(kind)
        except SourceUnavailable as e:
            logger.warning(f"Could not load {kind.value}: {e}")
            return []

        record_type = RECORD_TYPES[kind]
        records = []
        for index, item in enumerate(raw):
            if not isinstance(item, dict):
                logger.warning(f"Skipping non-object {kind.value} entry at index {index}")
                continue
            try:
                records.append(record_type.from_dict(item))
            except ValidationFailure as e:
                logger.warning(f"Skipping malformed {kind.value} entry at index {index}: {e}")
        return records

    def _load_raw(self, kind: RecordKind) -> List[Any]:
        if self.storage is not None and self.prefer_storage:
            stored = self.storage.load(kind)
            if stored is not None:
                logger.debug(f"Using stored {kind.value} ({len(stored)} records)")
                return stored

        source = self.sources[kind]
        if source is None:
            return []
        if _is_url(source):
            return self._fetch_url(str(source))
        return self._read_file(Path(source))

    def _fetch_url(self, url: str) -> List[Any]:
        """
        Fetch a JSON array over HTTP.

        A 404 means the collection does not exist yet and loads as empty.

        Raises:
            SourceUnavailable: On network errors, other HTTP errors or bad JSON
        """
        try:
            response = requests.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise SourceUnavailable(f"Request to {url} failed: {e}") from e

        if response.status_code == 404:
            return []
        if not response.ok:
            raise SourceUnavailable(f"HTTP error! status: {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise SourceUnavailable(f"Invalid JSON from {url}: {e}") from e
        return data if isinstance(data, list) else []

    def _read_file(self, path: Path) -> List[Any]:
        if not path.exists():
            logger.info(f"No data file at {path}, starting empty")
            return []
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise SourceUnavailable(f"Cannot read {path}: {e}") from e
        return data if isinstance(data, list) else []
