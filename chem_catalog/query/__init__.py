"""Search/sort pipelines for chemical and product listings."""

from chem_catalog.query.pipeline import (
    CHEMICAL_QUERY,
    PRODUCT_QUERY,
    QueryPipeline,
    collation_key,
)

__all__ = [
    "CHEMICAL_QUERY",
    "PRODUCT_QUERY",
    "QueryPipeline",
    "collation_key",
]
