#!/usr/bin/env python
"""
CLI for calculating comparable adjustments from a JSON file.

The input file has the same shape as the API's calculate request:
    {"subject": {...}, "comparables": [...], "rates": {...}, "compAdjustments": {...}}

Usage:
    python -m cmaadjust.cli.calculate cma.json
    python -m cmaadjust.cli.calculate cma.json --json
    cat cma.json | python -m cmaadjust.cli.calculate -
"""

import argparse
import json
import sys
from typing import Any, Dict, List

from cmaadjust.adjustments.report import build_adjustment_report, parse_calculation_request
from cmaadjust.core.constants import NOT_APPLICABLE
from cmaadjust.exceptions import ValidationError
from cmaadjust.logging_config import setup_logging, get_logger


def _load_input(path: str) -> Any:
    if path == "-":
        return json.load(sys.stdin)
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def render_table(table: Dict[str, Any]) -> str:
    """Render a comparison table dict as fixed-width text."""
    columns: List[Dict[str, Any]] = table["columns"]
    label_width = max([len("Feature")] + [len(row["label"]) for row in table["rows"]]) + 2
    cell_width = 24

    def cell_text(cell: Dict[str, Any]) -> str:
        if cell["adjustment"] != NOT_APPLICABLE:
            return f"{cell['value']} ({cell['adjustment']})"
        return cell["value"]

    header = "Feature".ljust(label_width) + "Subject".ljust(cell_width)
    header += "".join(col["shortAddress"][:cell_width - 2].ljust(cell_width) for col in columns)

    lines = [header, "-" * len(header)]
    for row in table["rows"]:
        line = row["label"].ljust(label_width) + row["subject"].ljust(cell_width)
        line += "".join(cell_text(cell).ljust(cell_width) for cell in row["cells"])
        lines.append(line.rstrip())
    return "\n".join(lines)


def main():
    """Main entry point for the calculation CLI."""
    parser = argparse.ArgumentParser(
        description="Calculate CMA comparable adjustments",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m cmaadjust.cli.calculate cma.json
    python -m cmaadjust.cli.calculate cma.json --json
        """,
    )
    parser.add_argument("input", help="Path to the input JSON file, or - for stdin")
    parser.add_argument("--json", action="store_true", help="Output as JSON")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set log level (default: WARNING)",
    )

    args = parser.parse_args()

    setup_logging(level=args.log_level, force=True)
    logger = get_logger(__name__)

    try:
        request = parse_calculation_request(_load_input(args.input))
    except (OSError, ValueError, ValidationError) as e:
        logger.error("Could not read %s: %s", args.input, e)
        if args.json:
            print(json.dumps({"error": str(e)}))
        else:
            print(f"Error: {e}")
        sys.exit(1)

    report = build_adjustment_report(request)

    if args.json:
        print(json.dumps(report, indent=2, ensure_ascii=False))
        return

    if not report["results"]:
        print("No comparables to adjust.")
        return

    print("\n" + "=" * 50)
    print("Comparable Adjustments")
    print("=" * 50 + "\n")
    print(render_table(report["table"]))
    print()
    for item in report["summary"]:
        print(
            f"  {item['compAddress']}: {item['salePrice']} "
            f"{item['totalAdjustment']} = {item['adjustedPrice']}"
        )
    print()


if __name__ == "__main__":
    main()
