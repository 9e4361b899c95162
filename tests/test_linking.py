"""
Test suite for the linking engine.

Tests chemical/product association lookups, safety scoring,
alternative ranking, and visibility of records appended after the
engine was built.
"""

import pytest

from chem_catalog.catalog.models import Product
from chem_catalog.catalog.store import CatalogStore
from chem_catalog.linking.engine import LinkingEngine
from chem_catalog.linking.types import SafetyBand, ScoringConfig


def _ids(products):
    return [p.product_id for p in products]


# ============================================================================
# ASSOCIATIONS
# ============================================================================

class TestProductsContaining:
    """Tests for chemical -> products resolution."""

    def test_returns_products_in_catalog_order(self, engine):
        result = engine.products_containing("Sodium Lauryl Sulfate")
        assert _ids(result) == ["SK-1", "SK-3", "OC-1"]

    def test_unreferenced_chemical_is_empty(self, engine):
        assert engine.products_containing("Benzene") == []

    def test_unknown_chemical_is_empty(self, engine):
        assert engine.products_containing("Unobtainium") == []

    def test_dangling_name_still_matches_product_list(self, engine):
        # No chemical record exists, but the product lists the name
        assert _ids(engine.products_containing("Microbeads")) == ["SK-4"]

    def test_product_without_harmful_key_is_skipped(self, engine):
        for product in engine.products_containing("Paraben"):
            assert product.product_id != "OC-2"


class TestChemicalsIn:
    """Tests for product -> chemicals resolution."""

    def test_preserves_chemical_catalog_order(self, engine):
        names = [c.name for c in engine.chemicals_in("SK-1")]
        assert names == ["Paraben", "Sodium Lauryl Sulfate"]

    def test_dangling_names_are_skipped(self, engine):
        names = [c.name for c in engine.chemicals_in("SK-4")]
        assert names == ["Paraben", "Triclosan"]

    def test_missing_harmful_list_is_empty(self, engine):
        assert engine.chemicals_in("OC-2") == []

    def test_unknown_product_is_empty(self, engine):
        assert engine.chemicals_in("NOPE") == []


class TestFind:
    def test_find_product(self, engine):
        product = engine.find_product("SK-2")
        assert product is not None
        assert product.product_name == "Organic Balm"

    def test_find_product_missing(self, engine):
        assert engine.find_product("missing") is None

    def test_find_chemical(self, engine):
        chemical = engine.find_chemical("Triclosan")
        assert chemical is not None
        assert chemical.preservative is True

    def test_find_chemical_is_case_sensitive(self, engine):
        assert engine.find_chemical("triclosan") is None


# ============================================================================
# SAFETY SCORE
# ============================================================================

class TestSafetyScore:
    """Tests for the safety score formula."""

    @pytest.mark.parametrize("organic,harmful,expected", [
        (True, [], 100),
        (False, [], 85),
        (True, None, 100),
        (False, None, 85),
        (True, ["a"], 60),
        (False, ["a"], 50),
        (False, ["a", "b"], 40),
        (True, ["a", "b", "c"], 40),
        (False, ["a"] * 6, 0),
        (False, ["a"] * 12, 0),
        (True, ["a"] * 8, 0),
    ])
    def test_formula(self, engine, organic, harmful, expected):
        product = Product(product_id="X", is_organic=organic, harmful_chemicals=harmful)
        assert engine.safety_score(product) == expected

    def test_sample_scores(self, engine):
        scores = {p.product_id: engine.safety_score(p) for p in engine.store.products}
        assert scores == {
            "SK-1": 40, "SK-2": 100, "SK-3": 50,
            "SK-4": 40, "OC-1": 40, "OC-2": 85,
        }

    def test_tolerates_missing_optional_fields(self, engine):
        product = Product.from_dict({"productId": "bare", "harmfulChemicals": ["Ghost"]})
        assert product.ingredients is None
        assert engine.safety_score(product) == 50

    def test_custom_scoring_config(self, store):
        engine = LinkingEngine(store, ScoringConfig(penalty_per_chemical=25))
        assert engine.safety_score(store.products[0]) == 10

    def test_safety_band(self, engine):
        assert engine.safety_band(engine.find_product("SK-2")) is SafetyBand.GOOD
        assert engine.safety_band(engine.find_product("SK-3")) is SafetyBand.POOR
        assert engine.safety_band(engine.find_product("OC-2")) is SafetyBand.GOOD

    def test_invalid_scoring_config(self):
        with pytest.raises(ValueError):
            ScoringConfig(organic_clean=120)
        with pytest.raises(ValueError):
            ScoringConfig(penalty_per_chemical=-1)
        with pytest.raises(ValueError):
            ScoringConfig(good_threshold=50, moderate_threshold=70)
        with pytest.raises(ValueError):
            ScoringConfig(penalty_per_chemical=101)

    @pytest.mark.parametrize("kwargs", [
        {"organic_base": 90, "organic_clean": 80},
        {"conventional_base": 86},
    ])
    def test_base_above_clean_is_rejected(self, kwargs):
        with pytest.raises(ValueError):
            ScoringConfig(**kwargs)


# ============================================================================
# ALTERNATIVES
# ============================================================================

class TestAlternatives:
    """Tests for alternative product ranking."""

    def test_ranked_by_descending_score(self, engine):
        assert _ids(engine.alternatives_for("SK-4")) == ["SK-2", "SK-3", "SK-1"]

    def test_strictly_fewer_harmful_chemicals(self, engine):
        # SK-4 has 3 harmful chemicals and must not be offered for SK-1 (2)
        assert _ids(engine.alternatives_for("SK-1")) == ["SK-2", "SK-3"]

    def test_same_category_only(self, engine):
        assert _ids(engine.alternatives_for("OC-1")) == ["OC-2"]

    def test_clean_product_has_no_alternatives(self, engine):
        assert engine.alternatives_for("SK-2") == []
        assert engine.alternatives_for("OC-2") == []

    def test_unknown_product(self, engine):
        assert engine.alternatives_for("NOPE") == []

    def test_limit(self, engine):
        assert _ids(engine.alternatives_for("SK-4", limit=1)) == ["SK-2"]
        assert engine.alternatives_for("SK-4", limit=0) == []

    def test_equal_count_is_excluded_even_with_equal_score(self):
        store = CatalogStore(products=[
            Product("A", category="C", harmful_chemicals=["x"]),
            Product("B", category="C", harmful_chemicals=["y"]),
        ])
        engine = LinkingEngine(store)
        assert engine.alternatives_for("A") == []

    def test_ties_keep_catalog_order(self):
        subject = Product("S", category="C", harmful_chemicals=["a", "b", "c"])
        tied = [
            Product("T1", category="C", harmful_chemicals=["a"]),  # 50
            Product("T2", category="C", is_organic=True, harmful_chemicals=["a", "b"]),  # 50
            Product("T3", category="C", harmful_chemicals=["b"]),  # 50
        ]
        engine = LinkingEngine(CatalogStore(products=[subject] + tied))
        assert _ids(engine.alternatives_for("S")) == ["T1", "T2", "T3"]

        engine = LinkingEngine(CatalogStore(products=[subject] + tied[::-1]))
        assert _ids(engine.alternatives_for("S")) == ["T3", "T2", "T1"]

    def test_does_not_mutate_catalog(self, engine):
        before = _ids(engine.store.products)
        engine.alternatives_for("SK-4")
        assert _ids(engine.store.products) == before


# ============================================================================
# SCENARIO
# ============================================================================

class TestParabenScenario:
    """Two soaps, one containing Paraben."""

    def test_scores(self, scenario_engine):
        p1 = scenario_engine.find_product("P1")
        p2 = scenario_engine.find_product("P2")
        assert scenario_engine.safety_score(p1) == 50
        assert scenario_engine.safety_score(p2) == 100

    def test_alternatives(self, scenario_engine):
        assert _ids(scenario_engine.alternatives_for("P1")) == ["P2"]

    def test_products_containing(self, scenario_engine):
        assert _ids(scenario_engine.products_containing("Paraben")) == ["P1"]


# ============================================================================
# LIVE STORE
# ============================================================================

class TestLiveStore:
    """The engine reads the store's live collections."""

    def test_appended_product_is_visible(self, store, engine):
        store.append_product({
            "productId": "SK-9",
            "productName": "Plain Cream",
            "category": "Skincare",
            "description": "Fragrance free.",
            "isOrganic": True,
        })
        assert engine.find_product("SK-9") is not None
        assert _ids(engine.alternatives_for("SK-3"))[:2] == ["SK-2", "SK-9"]

    def test_appended_chemical_is_visible(self, store, engine):
        store.append_chemical({
            "name": "Microbeads",
            "type": "Plastic",
            "description": "Plastic particles.",
            "commonUses": "Scrubs",
            "regulatoryStatus": "Banned in rinse-off products",
        })
        names = [c.name for c in engine.chemicals_in("SK-4")]
        assert names == ["Paraben", "Triclosan", "Microbeads"]

    def test_appended_product_links_to_existing_chemical(self, store, engine):
        store.append_product({
            "productId": "OC-9",
            "productName": "Benzene Rinse",
            "category": "Oral Care",
            "description": "Hypothetical.",
            "harmfulChemicals": ["Benzene"],
        })
        assert _ids(engine.products_containing("Benzene")) == ["OC-9"]
