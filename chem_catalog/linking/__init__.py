"""
Chemical/product linking package.

Provides the association, safety scoring and alternative ranking logic
over a session's catalog store, plus plain-data summaries for display.
"""

from chem_catalog.linking.types import SafetyBand, ScoringConfig
from chem_catalog.linking.engine import LinkingEngine
from chem_catalog.linking.annotations import (
    PLACEHOLDER_IMAGE,
    chemical_summary,
    product_summary,
    resolve_image,
    safety_band,
)

__all__ = [
    "SafetyBand",
    "ScoringConfig",
    "LinkingEngine",
    "PLACEHOLDER_IMAGE",
    "chemical_summary",
    "product_summary",
    "resolve_image",
    "safety_band",
]
