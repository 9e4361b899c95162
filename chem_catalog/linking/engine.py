"""
Linking engine for chemicals and products.

Resolves the many-to-many association between chemicals and the products
that list them, computes product safety scores and ranks safer
alternatives within a category.

Every operation is a pure read over the catalog store's live
collections. Missing records produce empty results, never exceptions.
"""

from typing import List, Optional

from chem_catalog.catalog.models import Chemical, Product
from chem_catalog.catalog.store import CatalogStore
from chem_catalog.linking.types import SafetyBand, ScoringConfig


class LinkingEngine:
    """
    Cross-references chemicals and products held by a CatalogStore.

    The engine keeps a reference to the store rather than a snapshot, so
    records appended after construction are visible immediately.
    """

    def __init__(self, store: CatalogStore, scoring: Optional[ScoringConfig] = None):
        """
        Initialize the linking engine.

        Args:
            store: Catalog store whose collections are read on every call
            scoring: Score formula parameters (defaults if None)
        """
        self.store = store
        self.scoring = scoring or ScoringConfig()

    def products_containing(self, chemical_name: str) -> List[Product]:
        """
        Find every product listing ``chemical_name`` as harmful.

        Returns:
            Matching products in catalog order (empty if none)
        """
        return [p for p in self.store.products if p.contains(chemical_name)]

    def chemicals_in(self, product_id: str) -> List[Chemical]:
        """
        Resolve the chemical records listed by a product.

        Names with no matching chemical record are skipped.

        Returns:
            Chemicals in chemical-catalog order (empty if product not found)
        """
        product = self.find_product(product_id)
        if product is None or not product.harmful_chemicals:
            return []

        names = set(product.harmful_chemicals)
        return [c for c in self.store.chemicals if c.name in names]

    def find_product(self, product_id: str) -> Optional[Product]:
        for product in self.store.products:
            if product.product_id == product_id:
                return product
        return None

    def find_chemical(self, name: str) -> Optional[Chemical]:
        for chemical in self.store.chemicals:
            if chemical.name == name:
                return chemical
        return None

    def safety_score(self, product: Product) -> int:
        """
        Compute a product's safety score in [0, 100].

        A product with no harmful chemicals scores 100 (organic) or 85.
        Otherwise the score starts at 70 (organic) or 60 and loses 10 per
        listed chemical, floored at 0.
        """
        cfg = self.scoring
        count = product.harmful_count
        if count == 0:
            return cfg.organic_clean if product.is_organic else cfg.conventional_clean

        base = cfg.organic_base if product.is_organic else cfg.conventional_base
        return max(0, base - cfg.penalty_per_chemical * count)

    def safety_band(self, product: Product) -> SafetyBand:
        return self.scoring.band(self.safety_score(product))

    def alternatives_for(self, product_id: str, limit: Optional[int] = None) -> List[Product]:
        """
        Rank safer products from the same category.

        Candidates are the other products in the subject's category that
        list strictly fewer harmful chemicals. They are ordered by
        descending safety score; equal scores keep catalog order.

        Args:
            product_id: Subject product
            limit: Maximum number of alternatives to return (all if None)

        Returns:
            Ranked alternatives (empty if the subject is not found)
        """
        product = self.find_product(product_id)
        if product is None:
            return []

        current_count = product.harmful_count
        candidates = [
            p for p in self.store.products
            if p.product_id != product_id
            and p.category == product.category
            and p.harmful_count < current_count
        ]

        # sorted() is stable, so ties keep catalog order
        ranked = sorted(candidates, key=self.safety_score, reverse=True)
        if limit is not None:
            ranked = ranked[:max(0, limit)]
        return ranked
