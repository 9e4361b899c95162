"""
Add a chemical or product to the catalog.

Reads one JSON object (camelCase keys) from a file, an inline string or
stdin, validates required fields, and saves the updated collection to
storage.

Usage:
    python scripts/add_record.py chemicals --file new_chemical.json
    python scripts/add_record.py products --data '{"productId": "P9", ...}'
    cat product.json | python scripts/add_record.py products
"""

import argparse
import json
import sys
from pathlib import Path

from loguru import logger

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from chem_catalog.catalog import CatalogError, RecordKind, ValidationFailure
from chem_catalog.session import build_session
from chem_catalog.utils.config_manager import ConfigManager

DEFAULT_CONFIG = PROJECT_ROOT / "config" / "catalog_config.yaml"


def read_payload(args) -> dict:
    """Read the JSON object to add."""
    if args.file:
        text = args.file.read_text(encoding="utf-8")
    elif args.data:
        text = args.data
    else:
        text = sys.stdin.read()

    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("Expected a single JSON object")
    return data


def main():
    """Main execution."""
    parser = argparse.ArgumentParser(description="Add a chemical or product to the catalog")
    parser.add_argument("kind", choices=["chemicals", "products"], help="Target collection")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--file", type=Path, default=None, help="JSON file with the record")
    source.add_argument("--data", type=str, default=None, help="Inline JSON record")
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG, help="YAML config path")

    args = parser.parse_args()

    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level="INFO",
    )

    kind = RecordKind(args.kind)
    label = "Chemical" if kind is RecordKind.CHEMICAL else "Product"

    try:
        payload = read_payload(args)
    except (OSError, ValueError) as e:
        logger.error(f"Error adding {label.lower()}: {e}")
        return 1

    session = build_session(ConfigManager(args.config), base_path=str(PROJECT_ROOT))
    try:
        record = session.store.append(kind, payload)
    except ValidationFailure as e:
        logger.error(f"Error adding {label.lower()}: {e}")
        return 1
    except CatalogError as e:
        logger.error(f"Error adding {label.lower()}: {e}")
        return 2
    finally:
        session.close()

    logger.success(f"{label} added successfully! ({record.key})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
