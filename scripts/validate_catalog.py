"""Validate the catalog source file against the Product schema.

Reads the JSON array through the same CatalogStore the API uses and reports
every record that the API would refuse to serve.

Environment Variables:
    CATALOG_PATH: Catalog file to check (default: data/products.json)

Usage:
    uv run python -m scripts.validate_catalog
    uv run python -m scripts.validate_catalog --source /srv/catalog/products.json
"""

import argparse
import sys
from pathlib import Path

from storefront.core.config import settings
from storefront.core.errors import DataSourceError
from storefront.schemas.validation import validate_product
from storefront.services.catalog_store import CatalogStore


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate the catalog JSON file against the Product schema.",
    )
    parser.add_argument(
        "--source",
        type=Path,
        default=None,
        help=f"Path to the catalog JSON file (default: {settings.CATALOG_PATH})",
    )
    return parser


def validate_catalog(path: Path) -> tuple[int, list[str]]:
    """Return (record count, one line per violation)."""
    records = CatalogStore(path).load()
    problems = []
    for index, record in enumerate(records):
        result = validate_product(record)
        if result.ok:
            continue
        record_id = record.get("id", "?") if isinstance(record, dict) else "?"
        for violation in result.violations:
            problems.append(f"[{index}] {record_id}: {violation}")
    return len(records), problems


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    path = args.source or settings.CATALOG_PATH

    try:
        count, problems = validate_catalog(path)
    except DataSourceError as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 1

    if problems:
        for line in problems:
            print(line)
        print(f"Catalog INVALID ({len(problems)} violations)")
        return 1

    print(f"Catalog OK ({count} products)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
