#!/usr/bin/env python3
"""
Import wishlist items from a CSV file.

Uses the same parser and header synonyms as the admin upload endpoint.

Usage:
    python -m scripts.import_csv items.csv --family Rigsby            # dry run
    python -m scripts.import_csv items.csv --family Rigsby --execute
"""
import argparse
import logging
from pathlib import Path

from api.services.csv_import import parse_csv_text
from api.services.data_store import JsonFileDataStore
from api.services.wishlist import WishlistService

logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
logger = logging.getLogger(__name__)


def import_csv(csv_path: str, family: str = None, data_path: str = None, dry_run: bool = True) -> int:
    """
    Import a CSV file into the wishlist.

    Args:
        csv_path: Path to CSV file
        family: Family for rows without a family column
        data_path: Data file (defaults to the configured one)
        dry_run: If True, only count rows

    Returns:
        Number of items added (or rows that would be added)
    """
    path = Path(csv_path)
    if not path.exists():
        logger.error(f"CSV file not found: {csv_path}")
        return 0

    text = path.read_text(encoding="utf-8-sig")

    if dry_run:
        records = parse_csv_text(text)
        logger.info(f"Would import {len(records)} items from {csv_path}")
        logger.info("DRY RUN - no changes made. Use --execute to apply.")
        return len(records)

    service = WishlistService(JsonFileDataStore(data_path))
    added = service.import_csv(text, family)
    logger.info(f"Imported {len(added)} items from {csv_path}")
    return len(added)


def main(argv=None):
    parser = argparse.ArgumentParser(description='Import wishlist items from CSV')
    parser.add_argument('csv', help='Path to CSV file')
    parser.add_argument('--family', type=str, help='Family for rows without a family column')
    parser.add_argument('--data', type=str, help='Path to data file')
    parser.add_argument('--execute', action='store_true', help='Actually apply changes')

    args = parser.parse_args(argv)

    return import_csv(
        csv_path=args.csv,
        family=args.family,
        data_path=args.data,
        dry_run=not args.execute,
    )


if __name__ == '__main__':
    main()
