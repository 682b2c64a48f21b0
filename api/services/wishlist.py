"""
Wishlist operations.

Every operation follows the same shape: load the whole document, work on
the in-memory copy, save it back if anything changed. Nothing is cached
between calls.
"""
import logging
from typing import Any, Optional

from api.services.csv_import import CSV_TAG_SPLIT_PATTERN, parse_csv_text, records_to_items
from api.services.data_store import DataStore
from api.services.errors import ConflictError, InvalidRequestError, NotFoundError
from api.services.normalizer import as_item_id, family_or_default, split_tags
from api.services.wishlist_models import DEFAULT_FAMILY, Item, Person

logger = logging.getLogger(__name__)

MSG_ITEM_NOT_FOUND = "Item not found."
MSG_ALREADY_CLAIMED = "This item was already claimed."
MSG_NOT_YOUR_CLAIM = "You can only unclaim items you claimed."

# Plain-string item fields an admin may edit
EDITABLE_ITEM_FIELDS = ("recipientCode", "recipientName", "itemName", "url")


def item_view(item: Item, viewer_code: Optional[str] = None, include_claim: bool = True) -> dict:
    """Shape an item for the wishlist / shopping list views."""
    view = {
        "id": item.id,
        "row": item.id,
        "recipientCode": item.recipientCode,
        "recipientName": item.recipientName,
        "itemName": item.itemName,
        "details": item.details,
        "url": item.url,
        "tags": list(item.tags),
    }
    if include_claim:
        view["claimed"] = item.claimed
        view["claimedByMe"] = item.is_claimed_by(viewer_code)
    return view


def _coerce_tags(value: Any) -> list[str]:
    if isinstance(value, list):
        return [str(t).strip() for t in value if t is not None and str(t).strip()]
    return split_tags(value if isinstance(value, str) else None, CSV_TAG_SPLIT_PATTERN)


class WishlistService:
    """Operations on the family wishlist backed by a DataStore."""

    def __init__(self, store: DataStore):
        self.store = store

    # ------------------------------------------------------------------
    # Viewing
    # ------------------------------------------------------------------

    def recipients(self, code: Optional[str], family: str = DEFAULT_FAMILY) -> dict:
        data = self.store.load()
        current_user = data.find_person(code, family) if code else None
        return {
            "currentUser": current_user.to_dict() if current_user else None,
            "recipients": [p.to_dict() for p in data.people_in_family(family)],
            "family": family,
        }

    def families(self) -> list[str]:
        return self.store.load().families()

    def wishlist(self, viewer_code: Optional[str], recipient_code: Optional[str],
                 family: str = DEFAULT_FAMILY) -> list[dict]:
        data = self.store.load()
        return [
            item_view(i, viewer_code)
            for i in data.items_in_family(family)
            if i.recipientCode == recipient_code
        ]

    def shopping_list(self, viewer_code: Optional[str], family: str = DEFAULT_FAMILY) -> list[dict]:
        if not viewer_code:
            return []
        data = self.store.load()
        return [
            item_view(i, viewer_code, include_claim=False)
            for i in data.items_in_family(family)
            if i.claimedByCode == viewer_code
        ]

    # ------------------------------------------------------------------
    # Claims
    # ------------------------------------------------------------------

    def claim(self, viewer_code: Optional[str], item_id: Any, family: str = DEFAULT_FAMILY) -> dict:
        """
        Reserve an item for a viewer.

        Re-claiming an item the viewer already holds succeeds. Failures are
        reported in the result rather than raised.
        """
        if not viewer_code:
            raise InvalidRequestError("Missing viewerCode.")

        data = self.store.load()
        number = as_item_id(item_id)
        item = data.find_item(number, family) if number is not None else None

        if not item:
            return {"success": False, "message": MSG_ITEM_NOT_FOUND}

        if item.claimedByCode and item.claimedByCode != viewer_code:
            logger.info(f"Claim rejected: item {item.id} already claimed")
            return {"success": False, "message": MSG_ALREADY_CLAIMED}

        item.claimedByCode = viewer_code
        self.store.save(data)
        logger.info(f"Item {item.id} claimed by {viewer_code} ({family})")
        return {"success": True}

    def unclaim(self, viewer_code: Optional[str], item_id: Any, family: str = DEFAULT_FAMILY) -> dict:
        """Release a claim. Only the claimant may unclaim."""
        data = self.store.load()
        number = as_item_id(item_id)
        item = data.find_item(number, family) if number is not None else None

        if not item:
            return {"success": False, "message": MSG_ITEM_NOT_FOUND}

        if not viewer_code or item.claimedByCode != viewer_code:
            return {"success": False, "message": MSG_NOT_YOUR_CLAIM}

        item.claimedByCode = None
        self.store.save(data)
        logger.info(f"Item {item.id} unclaimed by {viewer_code} ({family})")
        return {"success": True}

    # ------------------------------------------------------------------
    # Items (admin)
    # ------------------------------------------------------------------

    def list_items(self, family: str = DEFAULT_FAMILY) -> list[Item]:
        return self.store.load().items_in_family(family)

    def import_csv(self, text: str, family: Optional[str] = None) -> list[Item]:
        """
        Append items parsed from CSV text.

        Returns:
            The items added (empty when the text has no data rows)
        """
        records = parse_csv_text(text)
        if not records:
            return []

        data = self.store.load()
        taken = {i.id for i in data.items}
        added = records_to_items(records, taken, family)
        data.items.extend(added)
        self.store.save(data)
        logger.info(f"Imported {len(added)} items from CSV")
        return added

    def update_item(self, item_id: Any, family: str, updates: dict) -> Item:
        """
        Apply a partial update to an item.

        ``notes`` and ``tag`` are accepted as legacy spellings of
        ``details`` and ``tags``.

        Raises:
            InvalidRequestError: If item_id is not numeric
            NotFoundError: If no such item exists in the family
        """
        number = as_item_id(item_id)
        if number is None:
            raise InvalidRequestError("Invalid item id.")

        data = self.store.load()
        item = data.find_item(number, family)
        if not item:
            raise NotFoundError(MSG_ITEM_NOT_FOUND)

        for key in EDITABLE_ITEM_FIELDS:
            if updates.get(key) is not None:
                setattr(item, key, str(updates[key]))

        if updates.get("details") is not None:
            item.details = str(updates["details"])
        elif updates.get("notes") is not None:
            item.details = str(updates["notes"])

        if updates.get("tags") is not None:
            item.tags = _coerce_tags(updates["tags"])
        elif updates.get("tag") is not None:
            item.tags = _coerce_tags(updates["tag"])

        if "claimedByCode" in updates:
            item.claimedByCode = updates["claimedByCode"] or None

        if updates.get("family"):
            item.family = str(updates["family"])

        self.store.save(data)
        logger.info(f"Updated item {item.id}")
        return item

    def set_item_families(self, family: str, from_family: str = DEFAULT_FAMILY,
                          dry_run: bool = False) -> int:
        """
        Move every item in ``from_family`` into ``family``.

        Returns:
            Number of items moved (or that would be moved on a dry run)
        """
        data = self.store.load()
        moved = [i for i in data.items if i.family == from_family and i.family != family]
        if moved and not dry_run:
            for item in moved:
                item.family = family
            self.store.save(data)
        return len(moved)

    # ------------------------------------------------------------------
    # People (admin)
    # ------------------------------------------------------------------

    def create_person(self, code: Optional[str], name: Optional[str] = None,
                      preferences: Optional[str] = None, family: Optional[str] = None) -> Person:
        """
        Add a person.

        Raises:
            InvalidRequestError: If code is blank
            ConflictError: If any person already has this code, ignoring case
        """
        code = (code or "").strip()
        if not code:
            raise InvalidRequestError("Missing person code.")

        data = self.store.load()
        wanted = code.casefold()
        if any(p.code.casefold() == wanted for p in data.people):
            raise ConflictError(f"A person with code '{code}' already exists.")

        person = Person(
            code=code,
            name=name or "",
            preferences=preferences or "",
            family=family_or_default(family),
        )
        data.people.append(person)
        self.store.save(data)
        logger.info(f"Created person {code} ({person.family})")
        return person

    def update_person(self, code: str, family: str, updates: dict) -> Person:
        data = self.store.load()
        person = data.find_person(code, family)
        if not person:
            raise NotFoundError("Person not found.")

        if updates.get("name") is not None:
            person.name = str(updates["name"])
        if updates.get("preferences") is not None:
            person.preferences = str(updates["preferences"])
        if updates.get("family"):
            person.family = str(updates["family"])

        self.store.save(data)
        logger.info(f"Updated person {code}")
        return person

    def delete_person(self, code: str, family: str) -> int:
        """
        Remove a person and their items within the same family.

        Returns:
            Number of items removed alongside the person
        """
        data = self.store.load()
        person = data.find_person(code, family)
        if not person:
            raise NotFoundError("Person not found.")

        data.people = [p for p in data.people if p is not person]
        before = len(data.items)
        data.items = [
            i for i in data.items
            if not (i.recipientCode == code and i.family == family)
        ]
        removed = before - len(data.items)

        self.store.save(data)
        logger.info(f"Deleted person {code} ({family}) and {removed} items")
        return removed
