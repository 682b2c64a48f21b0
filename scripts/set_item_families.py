#!/usr/bin/env python3
"""
Move wishlist items into a family.

Older data files have no ``family`` on items, so everything lands in the
"default" family. This stamps those items (or any other source family)
with the family they belong to.

Usage:
    python -m scripts.set_item_families --family Rigsby            # dry run
    python -m scripts.set_item_families --family Rigsby --execute
"""
import argparse
import logging

from api.services.data_store import JsonFileDataStore
from api.services.wishlist import WishlistService
from api.services.wishlist_models import DEFAULT_FAMILY

logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
logger = logging.getLogger(__name__)


def set_item_families(family: str, from_family: str = DEFAULT_FAMILY,
                      data_path: str = None, dry_run: bool = True) -> int:
    """
    Move items from one family to another.

    Args:
        family: Target family name
        from_family: Items currently in this family are moved
        data_path: Data file (defaults to the configured one)
        dry_run: If True, only report

    Returns:
        Number of items moved (or that would move)
    """
    service = WishlistService(JsonFileDataStore(data_path))
    count = service.set_item_families(family, from_family=from_family, dry_run=dry_run)

    if count == 0:
        logger.info("No changes needed")
    elif dry_run:
        logger.info(f"Would update {count} items to family={family}")
        logger.info("DRY RUN - no changes made. Use --execute to apply.")
    else:
        logger.info(f"Updated {count} items to family={family}")

    return count


def main(argv=None):
    parser = argparse.ArgumentParser(description='Move wishlist items into a family')
    parser.add_argument('--family', required=True, help='Family to assign')
    parser.add_argument('--from', dest='from_family', default=DEFAULT_FAMILY,
                        help='Only move items currently in this family (default: "default")')
    parser.add_argument('--data', type=str, help='Path to data file')
    parser.add_argument('--execute', action='store_true', help='Actually apply changes')

    args = parser.parse_args(argv)

    return set_item_families(
        family=args.family,
        from_family=args.from_family,
        data_path=args.data,
        dry_run=not args.execute,
    )


if __name__ == '__main__':
    main()
