"""
Tests for WishlistService operations.

Runs against the in-memory store seeded by conftest.
"""
import pytest

from api.services.errors import ConflictError, InvalidRequestError, NotFoundError
from api.services.wishlist import (
    MSG_ALREADY_CLAIMED,
    MSG_ITEM_NOT_FOUND,
    MSG_NOT_YOUR_CLAIM,
    WishlistService,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def service(memory_store):
    return WishlistService(memory_store)


def _item(store, item_id):
    return next(i for i in store.load().items if i.id == item_id)


class TestViews:

    def test_recipients_scoped_to_family(self, service):
        result = service.recipients("SAM", "default")
        assert result["currentUser"]["name"] == "Sam"
        assert {p["code"] for p in result["recipients"]} == {"LAUREN", "SAM"}

        result = service.recipients("SAM", "Rigsby")
        assert result["currentUser"] is None
        assert [p["name"] for p in result["recipients"]] == ["Lauren R"]

    def test_recipients_code_is_case_sensitive(self, service):
        assert service.recipients("sam", "default")["currentUser"] is None

    def test_families(self, service):
        assert service.families() == ["Rigsby", "default"]

    def test_wishlist_claim_flags(self, service):
        items = service.wishlist("SAM", "LAUREN", "default")
        by_id = {i["id"]: i for i in items}
        assert set(by_id) == {1, 2}
        assert by_id[1]["claimed"] is False
        assert by_id[2]["claimed"] is True
        assert by_id[2]["claimedByMe"] is True
        assert by_id[2]["row"] == 2

    def test_wishlist_without_viewer(self, service):
        items = service.wishlist(None, "LAUREN", "default")
        assert all(i["claimedByMe"] is False for i in items)

    def test_shopping_list(self, service):
        items = service.shopping_list("SAM", "default")
        assert [i["itemName"] for i in items] == ["Book"]
        assert "claimed" not in items[0]
        assert service.shopping_list("SAM", "Rigsby") == []
        assert service.shopping_list(None, "default") == []


class TestClaims:

    def test_claim_unclaimed_item(self, service, memory_store):
        assert service.claim("LAUREN", 3) == {"success": True}
        assert _item(memory_store, 3).claimedByCode == "LAUREN"

    def test_reclaim_by_same_viewer(self, service, memory_store):
        service.claim("LAUREN", 3)
        assert service.claim("LAUREN", "3") == {"success": True}
        assert _item(memory_store, 3).claimedByCode == "LAUREN"

    def test_claim_by_other_viewer_fails(self, service, memory_store):
        result = service.claim("LAUREN", 2)
        assert result == {"success": False, "message": MSG_ALREADY_CLAIMED}
        assert _item(memory_store, 2).claimedByCode == "SAM"

    def test_claim_missing_item(self, service, memory_store):
        assert service.claim("SAM", 99)["message"] == MSG_ITEM_NOT_FOUND
        assert service.claim("SAM", "abc")["message"] == MSG_ITEM_NOT_FOUND
        assert memory_store.save_count == 0

    def test_claim_is_family_scoped(self, service):
        assert service.claim("SAM", 4, "default")["message"] == MSG_ITEM_NOT_FOUND
        assert service.claim("SAM", 4, "Rigsby") == {"success": True}

    def test_claim_requires_viewer(self, service):
        with pytest.raises(InvalidRequestError):
            service.claim("", 1)

    def test_unclaim_by_non_claimant_fails(self, service, memory_store):
        result = service.unclaim("LAUREN", 2)
        assert result == {"success": False, "message": MSG_NOT_YOUR_CLAIM}
        assert _item(memory_store, 2).claimedByCode == "SAM"

    def test_unclaim_unclaimed_item_fails(self, service):
        assert service.unclaim("SAM", 1)["message"] == MSG_NOT_YOUR_CLAIM

    def test_unclaim_by_claimant(self, service, memory_store):
        assert service.unclaim("SAM", 2) == {"success": True}
        assert _item(memory_store, 2).claimedByCode is None


class TestItems:

    def test_import_csv_appends(self, service, memory_store):
        added = service.import_csv('itemName,recipientCode,tags\nBike,LAUREN,"red,shiny"\n')
        assert len(added) == 1
        assert added[0].id == 5
        stored = _item(memory_store, 5)
        assert stored.tags == ["red", "shiny"]
        assert memory_store.document["items"][-1]["tag"] == "red/shiny"

    def test_import_csv_request_family(self, service, memory_store):
        service.import_csv("name\nKite\n", "Rigsby")
        assert _item(memory_store, 5).family == "Rigsby"

    def test_import_csv_no_rows(self, service, memory_store):
        assert service.import_csv("name,url\n") == []
        assert memory_store.save_count == 0

    def test_list_items(self, service):
        assert [i.id for i in service.list_items("Rigsby")] == [4]

    def test_update_item_partial(self, service, memory_store):
        item = service.update_item("1", "default", {"itemName": "Red bike", "notes": "from notes"})
        assert item.itemName == "Red bike"
        assert item.details == "from notes"
        assert item.url == ""
        raw = memory_store.document["items"][0]
        assert raw["details"] == raw["notes"] == "from notes"

    def test_update_item_tags_from_string(self, service, memory_store):
        service.update_item(1, "default", {"tags": "a, b/c"})
        raw = memory_store.document["items"][0]
        assert raw["tags"] == ["a", "b", "c"]
        assert raw["tag"] == "a/b/c"

    def test_update_item_legacy_tag(self, service):
        item = service.update_item(1, "default", {"tag": "x|y"})
        assert item.tags == ["x", "y"]

    def test_update_item_semicolon_tags_match_csv(self, service):
        item = service.update_item(1, "default", {"tags": "a;b/c"})
        assert item.tags == ["a", "b", "c"]

    def test_update_item_clears_claim(self, service):
        item = service.update_item(2, "default", {"claimedByCode": None})
        assert item.claimedByCode is None

    def test_update_item_invalid_id(self, service):
        with pytest.raises(InvalidRequestError):
            service.update_item("abc", "default", {})

    def test_update_item_wrong_family(self, service):
        with pytest.raises(NotFoundError):
            service.update_item(4, "default", {"itemName": "x"})

    def test_set_item_families(self, service, memory_store):
        assert service.set_item_families("Smith", dry_run=True) == 3
        assert memory_store.save_count == 0

        assert service.set_item_families("Smith") == 3
        families = {i.id: i.family for i in memory_store.load().items}
        assert families == {1: "Smith", 2: "Smith", 3: "Smith", 4: "Rigsby"}


class TestPeople:

    def test_create_person(self, service, memory_store):
        person = service.create_person("ALEX", "Alex", "Books", None)
        assert person.family == "default"
        assert memory_store.load().find_person("ALEX", "default") is not None

    def test_create_requires_code(self, service):
        with pytest.raises(InvalidRequestError):
            service.create_person("  ", "Nobody")

    def test_create_duplicate_code_case_insensitive(self, service):
        with pytest.raises(ConflictError):
            service.create_person("lauren", "Other", family="Elsewhere")

    def test_update_person(self, service):
        person = service.update_person("SAM", "default", {"name": "Samuel", "preferences": "Socks"})
        assert person.name == "Samuel"
        assert person.preferences == "Socks"

    def test_update_person_not_found(self, service):
        with pytest.raises(NotFoundError):
            service.update_person("SAM", "Rigsby", {"name": "x"})

    def test_delete_person_cascades_within_family(self, service, memory_store):
        removed = service.delete_person("LAUREN", "default")
        assert removed == 2

        data = memory_store.load()
        assert [(p.code, p.family) for p in data.people] == [("SAM", "default"), ("LAUREN", "Rigsby")]
        assert sorted(i.id for i in data.items) == [3, 4]

    def test_delete_person_not_found(self, service, memory_store):
        with pytest.raises(NotFoundError):
            service.delete_person("NOBODY", "default")
        assert memory_store.save_count == 0
