"""
Export a product safety report to Excel.

Output tabs:
    Products   - One row per product with score, band and best alternative
    Chemicals  - One row per chemical with the products it is found in
    Summary    - Headline statistics

Usage:
    python scripts/export_safety_report.py
    python scripts/export_safety_report.py --output reports/safety.xlsx
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

import pandas as pd
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from chem_catalog.reporting import build_report
from chem_catalog.session import build_session
from chem_catalog.utils.config_manager import ConfigManager

EXPORT_DIR = PROJECT_ROOT / "reports" / "exports"
DEFAULT_CONFIG = PROJECT_ROOT / "config" / "catalog_config.yaml"

# ── Styling constants ─────────────────────────────────────────────────────────
HEADER_FILL = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
HEADER_FONT = Font(color="FFFFFF", bold=True, size=11)
HEADER_ALIGN = Alignment(horizontal="center", vertical="center", wrap_text=True)

BAND_FILLS = {
    "GOOD": PatternFill(start_color="C6EFCE", end_color="C6EFCE", fill_type="solid"),
    "MODERATE": PatternFill(start_color="FFF2CC", end_color="FFF2CC", fill_type="solid"),
    "POOR": PatternFill(start_color="FFE5E5", end_color="FFE5E5", fill_type="solid"),
}

logger = logging.getLogger("export_safety_report")


def _style_sheet(worksheet, df: pd.DataFrame) -> None:
    """Header styling, column widths and band colouring."""
    for cell in worksheet[1]:
        cell.fill = HEADER_FILL
        cell.font = HEADER_FONT
        cell.alignment = HEADER_ALIGN

    for idx, column in enumerate(df.columns, start=1):
        values = [str(v) for v in df[column].tolist()] + [str(column)]
        width = min(max(len(v) for v in values) + 2, 60)
        worksheet.column_dimensions[get_column_letter(idx)].width = width

    if "Safety Band" in df.columns:
        band_col = list(df.columns).index("Safety Band") + 1
        for row in range(2, len(df) + 2):
            cell = worksheet.cell(row=row, column=band_col)
            fill = BAND_FILLS.get(cell.value)
            if fill is not None:
                cell.fill = fill

    worksheet.freeze_panes = "A2"


def write_export(sheets: dict, output_path: Path) -> Path:
    """Write all sheets to an Excel workbook."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        for name, df in sheets.items():
            df.to_excel(writer, sheet_name=name, index=False)
            _style_sheet(writer.sheets[name], df)
    logger.info(f"Wrote {output_path}")
    return output_path


def main():
    """Main execution."""
    parser = argparse.ArgumentParser(description="Export a product safety report to Excel")
    parser.add_argument("--output", type=Path, default=None, help="Output .xlsx path")
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG, help="YAML config path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")

    args = parser.parse_args()

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s  %(levelname)-8s  %(message)s",
        handlers=[logging.StreamHandler()],
    )

    session = build_session(ConfigManager(args.config), base_path=str(PROJECT_ROOT))
    try:
        sheets = build_report(session.engine)
    finally:
        session.close()

    if args.output:
        output_path = args.output
    else:
        ts = datetime.now().strftime("%Y%m%d_%H%M%S")
        output_path = EXPORT_DIR / f"safety_report_{ts}.xlsx"

    out = write_export(sheets, output_path)

    products = sheets["Products"]
    print(f"\n{'='*60}")
    print("EXPORT COMPLETE")
    print(f"{'='*60}")
    print(f"  File:       {out}")
    print(f"  Products:   {len(products)}")
    print(f"  Chemicals:  {len(sheets['Chemicals'])}")
    if not products.empty:
        counts = products["Safety Band"].value_counts()
        print(f"  Bands:      {counts.get('GOOD', 0)} good, "
              f"{counts.get('MODERATE', 0)} moderate, {counts.get('POOR', 0)} poor")
    print(f"{'='*60}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
