"""
Session-scoped catalog store.

Holds the chemical and product collections for one session and provides
the single mutation entry point, ``append``. Readers (the linking engine,
query pipelines) keep a reference to the store and read its live lists,
so records appended later are visible without rebuilding them.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, Union

from chem_catalog.catalog.exceptions import (
    CatalogWriteError,
    PersistenceFailure,
    ValidationFailure,
)
from chem_catalog.catalog.models import Chemical, Product, RecordKind, RECORD_TYPES

logger = logging.getLogger(__name__)


# Checked in this order; the first missing one is reported.
REQUIRED_FIELDS = {
    RecordKind.CHEMICAL: ("name", "type", "commonUses", "description", "regulatoryStatus"),
    RecordKind.PRODUCT: ("productId", "productName", "category", "description"),
}

Record = Union[Chemical, Product]


class Persistence(Protocol):
    """Storage collaborator invoked after every successful append."""

    def persist(self, kind: RecordKind, records: List[Dict[str, Any]]) -> None:
        ...


class CatalogStore:
    """
    Owns the two record collections for a session.

    The store is the only mutable structure in the catalog. All reads go
    through ``chemicals`` / ``products``, which return the live lists;
    callers must not mutate them directly.
    """

    def __init__(
        self,
        chemicals: Optional[Iterable[Chemical]] = None,
        products: Optional[Iterable[Product]] = None,
        persistence: Optional[Persistence] = None,
    ):
        """
        Initialize the store.

        Args:
            chemicals: Initially loaded chemical records
            products: Initially loaded product records
            persistence: Collaborator that stores a whole collection (optional)
        """
        self._collections: Dict[RecordKind, List[Record]] = {
            RecordKind.CHEMICAL: list(chemicals or []),
            RecordKind.PRODUCT: list(products or []),
        }
        self.persistence = persistence

    @property
    def chemicals(self) -> List[Chemical]:
        return self._collections[RecordKind.CHEMICAL]

    @property
    def products(self) -> List[Product]:
        return self._collections[RecordKind.PRODUCT]

    def records(self, kind: RecordKind) -> List[Record]:
        return self._collections[kind]

    def append(self, kind: RecordKind, data: Union[Mapping[str, Any], Record]) -> Record:
        """
        Validate and admit a new record, then persist its collection.

        Args:
            kind: Which collection the record belongs to
            data: Parsed JSON mapping (camelCase keys) or a record instance

        Returns:
            The stored record, with defaults applied

        Raises:
            ValidationFailure: If a required field is missing or falsy, or a
                list field holds a non-list value
            PersistenceFailure: If the persistence collaborator fails; the
                record is removed again before the error propagates
        """
        if isinstance(data, (Chemical, Product)):
            payload = data.to_dict()
        else:
            payload = dict(data)

        for field_name in REQUIRED_FIELDS[kind]:
            if not payload.get(field_name):
                logger.debug(f"Rejected {kind.value} record: missing {field_name}")
                raise ValidationFailure(field_name)

        record = self._apply_defaults(kind, payload)
        collection = self._collections[kind]
        collection.append(record)

        if self.persistence is not None:
            try:
                self.persistence.persist(kind, [r.to_dict() for r in collection])
            except CatalogWriteError:
                collection.pop()
                raise
            except Exception as e:
                collection.pop()
                logger.error(f"Failed to persist {kind.value}: {e}")
                raise PersistenceFailure(f"Could not save {kind.value}: {e}") from e

        logger.info(f"Added {kind.value[:-1]} '{record.key}' ({len(collection)} total)")
        return record

    def append_chemical(self, data: Union[Mapping[str, Any], Chemical]) -> Chemical:
        return self.append(RecordKind.CHEMICAL, data)

    def append_product(self, data: Union[Mapping[str, Any], Product]) -> Product:
        return self.append(RecordKind.PRODUCT, data)

    @staticmethod
    def _apply_defaults(kind: RecordKind, payload: Dict[str, Any]) -> Record:
        payload["image"] = payload.get("image") or ""
        if kind is RecordKind.CHEMICAL:
            payload["preservative"] = payload.get("preservative") or False
        else:
            payload["ingredients"] = payload.get("ingredients") or []
            payload["isOrganic"] = payload.get("isOrganic") or False
        return RECORD_TYPES[kind].from_dict(payload)

    def __len__(self) -> int:
        return len(self.chemicals) + len(self.products)

    def __repr__(self) -> str:
        return f"CatalogStore(chemicals={len(self.chemicals)}, products={len(self.products)})"
