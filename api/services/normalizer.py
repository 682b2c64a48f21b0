"""
Normalization of the persisted wishlist document.

Runs on every load so that documents written by older versions (``itemId``,
``notes``, ``tag`` strings, no ``family``) come back in the current shape.
Normalizing an already-normalized document is a no-op.
"""
import logging
import re
from typing import Any, Optional

from api.services.wishlist_models import (
    DEFAULT_FAMILY,
    ITEM_FIELDS,
    ITEM_LEGACY_FIELDS,
    PERSON_FIELDS,
    Item,
    Person,
    WishlistData,
)

logger = logging.getLogger(__name__)

# Separators accepted in a legacy ``tag`` string
TAG_SPLIT_PATTERN = re.compile(r"[/|,]+")


def split_tags(raw: Optional[str], pattern: re.Pattern = TAG_SPLIT_PATTERN) -> list[str]:
    """Split a delimited tag string into trimmed, non-empty tags."""
    if not isinstance(raw, str) or not raw.strip():
        return []
    return [t.strip() for t in pattern.split(raw) if t.strip()]


def as_item_id(value: Any) -> Optional[int]:
    """
    Coerce a stored or submitted id to an int.

    Returns None for missing, zero, or non-numeric values so callers can
    fall back to assigning a fresh id.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value or None
    if isinstance(value, float):
        return int(value) if value.is_integer() and value else None
    if isinstance(value, str):
        try:
            number = int(value.strip())
        except ValueError:
            return None
        return number or None
    return None


def family_or_default(value: Any) -> str:
    if not value:
        return DEFAULT_FAMILY
    return str(value)


def _as_str(value: Any) -> str:
    return "" if value is None else str(value)


def _extra(raw: dict, known: tuple) -> dict:
    return {k: v for k, v in raw.items() if k not in known}


def normalize_person(raw: dict) -> Person:
    return Person(
        code=_as_str(raw.get("code")),
        name=_as_str(raw.get("name")),
        preferences=_as_str(raw.get("preferences")),
        family=family_or_default(raw.get("family")),
        extra=_extra(raw, PERSON_FIELDS),
    )


def normalize_item(raw: dict, item_id: int) -> Item:
    details = raw.get("details")
    if details is None:
        details = raw.get("notes")

    tags = raw.get("tags")
    if isinstance(tags, list):
        tags = [str(t) for t in tags if t is not None]
    else:
        tags = split_tags(raw.get("tag"))

    claimed_by = raw.get("claimedByCode")

    return Item(
        id=item_id,
        recipientCode=_as_str(raw.get("recipientCode")),
        recipientName=_as_str(raw.get("recipientName")),
        itemName=_as_str(raw.get("itemName")),
        details=_as_str(details),
        url=_as_str(raw.get("url")),
        tags=tags,
        claimedByCode=None if claimed_by is None else str(claimed_by),
        family=family_or_default(raw.get("family")),
        extra=_extra(raw, ITEM_FIELDS + ITEM_LEGACY_FIELDS),
    )


def normalize_data(raw: Any) -> WishlistData:
    """
    Build a WishlistData from a raw JSON document.

    Args:
        raw: Parsed JSON (expected to be a dict with ``people`` and ``items``)

    Returns:
        Normalized WishlistData
    """
    if not isinstance(raw, dict):
        raw = {}

    raw_people = raw.get("people")
    raw_items = raw.get("items")
    if not isinstance(raw_people, list):
        raw_people = []
    if not isinstance(raw_items, list):
        raw_items = []

    raw_people = [p for p in raw_people if isinstance(p, dict)]
    raw_items = [i for i in raw_items if isinstance(i, dict)]

    # Current max id (including legacy itemId) to avoid collisions
    max_id = 0
    for it in raw_items:
        for key in ("id", "itemId"):
            number = as_item_id(it.get(key))
            if number and number > max_id:
                max_id = number

    items = []
    assigned = 0
    for it in raw_items:
        item_id = as_item_id(it.get("id")) or as_item_id(it.get("itemId"))
        if item_id is None:
            max_id += 1
            item_id = max_id
            assigned += 1
        items.append(normalize_item(it, item_id))

    if assigned:
        logger.info(f"Assigned ids to {assigned} legacy items")

    return WishlistData(
        people=[normalize_person(p) for p in raw_people],
        items=items,
        extra={k: v for k, v in raw.items() if k not in ("people", "items")},
    )
