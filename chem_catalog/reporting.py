"""
Tabular safety report over a catalog session.

Builds pandas DataFrames for the product and chemical listings, annotated
with linking engine output, plus a summary table. Writing them to a file
is left to the caller (see scripts/export_safety_report.py).
"""

from typing import Dict

import pandas as pd

from chem_catalog.linking.engine import LinkingEngine

PRODUCT_COLUMNS = [
    "Product ID", "Product Name", "Category", "Organic", "Harmful Count",
    "Harmful Chemicals", "Unknown Chemicals", "Safety Score", "Safety Band",
    "Best Alternative",
]
CHEMICAL_COLUMNS = [
    "Name", "Type", "Preservative", "Regulatory Status", "Product Count", "Products",
]


def product_frame(engine: LinkingEngine) -> pd.DataFrame:
    """One row per product, in catalog order."""
    rows = []
    for product in engine.store.products:
        score = engine.safety_score(product)
        known = {c.name for c in engine.chemicals_in(product.product_id)}
        harmful = product.harmful_chemicals or []
        best = engine.alternatives_for(product.product_id, limit=1)
        rows.append({
            "Product ID": product.product_id,
            "Product Name": product.product_name,
            "Category": product.category,
            "Organic": "Yes" if product.is_organic else "No",
            "Harmful Count": product.harmful_count,
            "Harmful Chemicals": ", ".join(harmful),
            "Unknown Chemicals": ", ".join(n for n in harmful if n not in known),
            "Safety Score": score,
            "Safety Band": engine.scoring.band(score).value.upper(),
            "Best Alternative": best[0].product_name if best else "",
        })
    return pd.DataFrame(rows, columns=PRODUCT_COLUMNS)


def chemical_frame(engine: LinkingEngine) -> pd.DataFrame:
    """One row per chemical, in catalog order."""
    rows = []
    for chemical in engine.store.chemicals:
        products = engine.products_containing(chemical.name)
        rows.append({
            "Name": chemical.name,
            "Type": chemical.type,
            "Preservative": "Yes" if chemical.preservative else "No",
            "Regulatory Status": chemical.regulatory_status,
            "Product Count": len(products),
            "Products": ", ".join(p.product_name for p in products),
        })
    return pd.DataFrame(rows, columns=CHEMICAL_COLUMNS)


def summary_frame(products: pd.DataFrame, chemicals: pd.DataFrame) -> pd.DataFrame:
    """Headline statistics as Metric / Value rows."""
    stats = [
        ("Products", len(products)),
        ("Chemicals", len(chemicals)),
    ]
    if not products.empty:
        stats += [
            ("Average safety score", round(float(products["Safety Score"].mean()), 1)),
            ("Products with no harmful chemicals", int((products["Harmful Count"] == 0).sum())),
            ("Organic products", int((products["Organic"] == "Yes").sum())),
        ]
        for band, count in products["Safety Band"].value_counts().sort_index().items():
            stats.append((f"Band {band}", int(count)))
    if not chemicals.empty:
        stats.append(("Chemicals not found in any product", int((chemicals["Product Count"] == 0).sum())))
    return pd.DataFrame(stats, columns=["Metric", "Value"])


def build_report(engine: LinkingEngine) -> Dict[str, pd.DataFrame]:
    """Build every report sheet, keyed by sheet name."""
    products = product_frame(engine)
    chemicals = chemical_frame(engine)
    return {
        "Products": products,
        "Chemicals": chemicals,
        "Summary": summary_frame(products, chemicals),
    }
