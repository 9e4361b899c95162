"""
Plain-data summaries for presenting catalog records.

Combines a record with linking engine output (score, band, linked
records, alternatives) into dictionaries a rendering layer can consume
directly. Nothing here touches a UI.
"""

from typing import Any, Dict, Optional

from chem_catalog.catalog.models import Chemical, Product
from chem_catalog.linking.engine import LinkingEngine
from chem_catalog.linking.types import SafetyBand, ScoringConfig

PLACEHOLDER_IMAGE = "https://via.placeholder.com/300x200?text=No+Image"
DEFAULT_MAX_ALTERNATIVES = 3


def safety_band(score: int, engine: Optional[LinkingEngine] = None) -> SafetyBand:
    """Classify a score using the engine's thresholds (defaults if no engine)."""
    scoring = engine.scoring if engine is not None else ScoringConfig()
    return scoring.band(score)


def resolve_image(image: Optional[str], placeholder: str = PLACEHOLDER_IMAGE) -> str:
    """Return the image URL, or the placeholder when it is blank."""
    if image and image.strip():
        return image
    return placeholder


def product_summary(
    product: Product,
    engine: LinkingEngine,
    max_alternatives: int = DEFAULT_MAX_ALTERNATIVES,
    placeholder: str = PLACEHOLDER_IMAGE,
) -> Dict[str, Any]:
    """
    Summarize a product for display.

    Args:
        product: Product to summarize
        engine: Linking engine over the session's catalog
        max_alternatives: How many ranked alternatives to include
        placeholder: Image URL used when the product has none

    Returns:
        Dictionary with the product's fields plus score, band, linked
        chemicals and alternatives
    """
    score = engine.safety_score(product)
    if isinstance(product.ingredients, list):
        ingredients_text = ", ".join(product.ingredients)
    else:
        ingredients_text = "Not specified"

    alternatives = engine.alternatives_for(product.product_id, limit=max_alternatives)

    return {
        "product_id": product.product_id,
        "product_name": product.product_name,
        "category": product.category,
        "description": product.description,
        "ingredients": ingredients_text,
        "is_organic": product.is_organic,
        "image": resolve_image(product.image, placeholder),
        "safety_score": score,
        "safety_band": engine.scoring.band(score).value,
        "harmful_chemicals": list(product.harmful_chemicals or []),
        "known_chemicals": [c.name for c in engine.chemicals_in(product.product_id)],
        "alternatives": [
            {"product_id": alt.product_id, "product_name": alt.product_name}
            for alt in alternatives
        ],
    }


def chemical_summary(
    chemical: Chemical,
    engine: LinkingEngine,
    placeholder: str = PLACEHOLDER_IMAGE,
) -> Dict[str, Any]:
    """Summarize a chemical and the products it is found in."""
    return {
        "name": chemical.name,
        "type": chemical.type,
        "description": chemical.description,
        "common_uses": chemical.common_uses,
        "regulatory_status": chemical.regulatory_status,
        "preservative": chemical.preservative,
        "image": resolve_image(chemical.image, placeholder),
        "found_in": [
            {"product_id": p.product_id, "product_name": p.product_name}
            for p in engine.products_containing(chemical.name)
        ],
    }
