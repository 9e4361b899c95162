"""
Browse the chemical and product catalog from the command line.

Lists chemicals or products filtered by a search term and ordered by a
sort key, or shows one record in detail with its safety score, linked
records and safer alternatives.

Usage:
    python scripts/browse_catalog.py products --search lotion --sort productName
    python scripts/browse_catalog.py chemicals --sort type
    python scripts/browse_catalog.py products --show SKN-001
    python scripts/browse_catalog.py chemicals --show Parabens --json
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from chem_catalog.linking.annotations import chemical_summary, product_summary
from chem_catalog.session import CatalogSession, build_session
from chem_catalog.utils.config_manager import ConfigManager

logger = logging.getLogger("browse_catalog")

DEFAULT_CONFIG = PROJECT_ROOT / "config" / "catalog_config.yaml"


def list_chemicals(session: CatalogSession, search: str, sort: str) -> None:
    chemicals = session.search_chemicals(search, sort)
    if not chemicals:
        print("No chemicals found.")
        return

    for chemical in chemicals:
        found_in = session.engine.products_containing(chemical.name)
        flag = "preservative" if chemical.preservative else ""
        print(f"  {chemical.name:<28} {chemical.type:<16} {flag:<13} in {len(found_in)} product(s)")
    print(f"\n{len(chemicals)} of {len(session.store.chemicals)} chemicals")


def list_products(session: CatalogSession, search: str, sort: str) -> None:
    products = session.search_products(search, sort)
    if not products:
        print("No products found.")
        return

    for product in products:
        score = session.engine.safety_score(product)
        print(f"  {product.product_id:<10} {product.product_name:<30} "
              f"{product.category:<12} {score:>3}/100")
    print(f"\n{len(products)} of {len(session.store.products)} products")


def show_product(session: CatalogSession, product_id: str, as_json: bool) -> int:
    product = session.engine.find_product(product_id)
    if product is None:
        print(f"Product not found: {product_id}")
        return 1

    summary = product_summary(
        product,
        session.engine,
        max_alternatives=int(session.config.get_display_param('max_alternatives')),
        placeholder=session.config.get_display_param('placeholder_image'),
    )
    if as_json:
        print(json.dumps(summary, indent=2))
        return 0

    print(f"\n{summary['product_name']} ({summary['product_id']})")
    print(f"  Category:      {summary['category']}")
    print(f"  Organic:       {'Yes' if summary['is_organic'] else 'No'}")
    print(f"  Safety Score:  {summary['safety_score']}/100 ({summary['safety_band']})")
    print(f"  Ingredients:   {summary['ingredients']}")
    if summary['harmful_chemicals']:
        print(f"  Harmful:       {', '.join(summary['harmful_chemicals'])}")
    else:
        print("  Harmful:       No known harmful chemicals")
    if summary['alternatives']:
        names = ", ".join(a['product_name'] for a in summary['alternatives'])
        print(f"  Alternatives:  {names}")
    return 0


def show_chemical(session: CatalogSession, name: str, as_json: bool) -> int:
    chemical = session.engine.find_chemical(name)
    if chemical is None:
        print(f"Chemical not found: {name}")
        return 1

    summary = chemical_summary(
        chemical,
        session.engine,
        placeholder=session.config.get_display_param('placeholder_image'),
    )
    if as_json:
        print(json.dumps(summary, indent=2))
        return 0

    print(f"\n{summary['name']} ({summary['type']})")
    print(f"  {summary['description']}")
    print(f"  Common uses:   {summary['common_uses']}")
    print(f"  Regulatory:    {summary['regulatory_status']}")
    print(f"  Preservative:  {'Yes' if summary['preservative'] else 'No'}")
    if summary['found_in']:
        names = ", ".join(p['product_name'] for p in summary['found_in'])
        print(f"  Found in:      {names}")
    return 0


def main():
    """Main execution."""
    parser = argparse.ArgumentParser(description="Browse the chemical and product catalog")
    parser.add_argument(
        "kind",
        choices=["chemicals", "products"],
        help="Which collection to browse",
    )
    parser.add_argument("--search", default="", help="Case-insensitive search term")
    parser.add_argument(
        "--sort",
        default="",
        help="Sort key (chemicals: name, type; products: productName, category)",
    )
    parser.add_argument("--show", default=None, help="Show one record by product ID or chemical name")
    parser.add_argument("--json", action="store_true", help="Print --show output as JSON")
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG, help="YAML config path")
    parser.add_argument("--no-storage", action="store_true", help="Ignore stored collections")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")

    args = parser.parse_args()

    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s  %(levelname)-8s  %(message)s",
        handlers=[logging.StreamHandler()],
    )

    session = build_session(
        ConfigManager(args.config),
        base_path=str(PROJECT_ROOT),
        use_storage=not args.no_storage,
    )
    try:
        if args.show is not None:
            if args.kind == "products":
                return show_product(session, args.show, args.json)
            return show_chemical(session, args.show, args.json)

        if args.kind == "products":
            list_products(session, args.search, args.sort)
        else:
            list_chemicals(session, args.search, args.sort)
        return 0
    finally:
        session.close()


if __name__ == "__main__":
    sys.exit(main())
