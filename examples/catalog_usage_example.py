"""
Example usage of the chemical/product catalog.

This script demonstrates:
1. Building a session from the bundled seed data
2. Searching and sorting listings
3. Resolving chemical <-> product links
4. Safety scores and safer alternatives
5. Adding a record (and a rejected one)

Run this example:
    python examples/catalog_usage_example.py
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from chem_catalog.catalog import ValidationFailure
from chem_catalog.database import create_test_db
from chem_catalog.session import build_session


def main():
    print("=" * 70)
    print("Chemical & Product Catalog - Usage Example")
    print("=" * 70)

    # 1. Build a session; an in-memory database keeps the example side-effect free
    print("\n1. Loading catalog...")
    db = create_test_db()
    session = build_session(base_path=str(project_root), db_manager=db)
    print(f"   {session.store!r}")

    # 2. Search and sort
    print("\n2. Products matching 'care', sorted by name:")
    for product in session.search_products("care", "productName"):
        print(f"   - {product.product_name} [{product.category}]")

    # 3. Links
    engine = session.engine
    print("\n3. Products containing 'Sodium Lauryl Sulfate':")
    for product in engine.products_containing("Sodium Lauryl Sulfate"):
        print(f"   - {product.product_name}")

    print("\n   Known chemicals in NAL-001 (unknown names are skipped):")
    for chemical in engine.chemicals_in("NAL-001"):
        print(f"   - {chemical.name}")

    # 4. Scores and alternatives
    print("\n4. Safety scores:")
    for product in session.store.products:
        score = engine.safety_score(product)
        print(f"   {product.product_id:<8} {score:>3}/100  {engine.scoring.band(score).value}")

    print("\n   Safer alternatives to SKN-001:")
    for alt in engine.alternatives_for("SKN-001", limit=3):
        print(f"   - {alt.product_name} ({engine.safety_score(alt)}/100)")

    # 5. Add records
    print("\n5. Adding records...")
    session.store.append_product({
        "productId": "SKN-004",
        "productName": "Calendula Cream",
        "category": "Skincare",
        "description": "Soothing organic cream.",
        "isOrganic": True,
    })
    print(f"   Added SKN-004, alternatives to SKN-003 now: "
          f"{[p.product_id for p in engine.alternatives_for('SKN-003')]}")

    try:
        session.store.append_chemical({"name": "Mystery"})
    except ValidationFailure as e:
        print(f"   Rejected: {e}")

    session.close()
    print("\n" + "=" * 70)


if __name__ == "__main__":
    main()
