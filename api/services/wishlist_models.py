"""
Wishlist data model.

People and items live in a single JSON document. Older documents used
``itemId``, ``notes`` and a ``tag`` string; those names are still written
next to the canonical fields so older front-ends keep working, but only
``id``, ``details`` and ``tags`` are held in memory.
"""
from dataclasses import dataclass, field
from typing import Any, Optional

DEFAULT_FAMILY = "default"

# Separator used when writing the legacy ``tag`` string
LEGACY_TAG_SEPARATOR = "/"

PERSON_FIELDS = ("code", "name", "preferences", "family")

ITEM_FIELDS = (
    "id",
    "recipientCode",
    "recipientName",
    "itemName",
    "details",
    "url",
    "tags",
    "claimedByCode",
    "family",
)

# Written on serialization, derived from the canonical fields
ITEM_LEGACY_FIELDS = ("itemId", "notes", "tag")


@dataclass
class Person:
    """A family member who can own a wishlist and claim items."""
    code: str
    name: str = ""
    preferences: str = ""
    family: str = DEFAULT_FAMILY
    extra: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        data = dict(self.extra)
        data.update({
            "code": self.code,
            "name": self.name,
            "preferences": self.preferences,
            "family": self.family,
        })
        return data


@dataclass
class Item:
    """A wishlist entry belonging to a recipient."""
    id: int
    recipientCode: str = ""
    recipientName: str = ""
    itemName: str = ""
    details: str = ""
    url: str = ""
    tags: list[str] = field(default_factory=list)
    claimedByCode: Optional[str] = None
    family: str = DEFAULT_FAMILY
    extra: dict = field(default_factory=dict)

    @property
    def tag(self) -> str:
        return LEGACY_TAG_SEPARATOR.join(self.tags)

    @property
    def claimed(self) -> bool:
        return bool(self.claimedByCode)

    def is_claimed_by(self, viewer_code: Optional[str]) -> bool:
        return bool(viewer_code and self.claimedByCode == viewer_code)

    def to_dict(self) -> dict:
        data = dict(self.extra)
        data.update({
            "id": self.id,
            "itemId": self.id,
            "recipientCode": self.recipientCode,
            "recipientName": self.recipientName,
            "itemName": self.itemName,
            "details": self.details,
            "notes": self.details,
            "url": self.url,
            "tags": list(self.tags),
            "tag": self.tag,
            "claimedByCode": self.claimedByCode,
            "family": self.family,
        })
        return data


@dataclass
class WishlistData:
    """The whole persisted document."""
    people: list[Person] = field(default_factory=list)
    items: list[Item] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        data = dict(self.extra)
        data["people"] = [p.to_dict() for p in self.people]
        data["items"] = [i.to_dict() for i in self.items]
        return data

    def max_item_id(self) -> int:
        return max((i.id for i in self.items), default=0)

    def next_item_id(self) -> int:
        return self.max_item_id() + 1

    def find_item(self, item_id: int, family: str) -> Optional[Item]:
        for item in self.items:
            if item.id == item_id and item.family == family:
                return item
        return None

    def find_person(self, code: str, family: str) -> Optional[Person]:
        for person in self.people:
            if person.code == code and person.family == family:
                return person
        return None

    def people_in_family(self, family: str) -> list[Person]:
        return [p for p in self.people if p.family == family]

    def items_in_family(self, family: str) -> list[Item]:
        return [i for i in self.items if i.family == family]

    def families(self) -> list[str]:
        seen = {p.family for p in self.people} | {i.family for i in self.items}
        return sorted(f for f in seen if f)
