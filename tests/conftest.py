"""
Pytest configuration and shared fixtures for Family Wishlist tests.

Test Categories:
- unit: Fast tests with no external dependencies

Run categories:
- pytest -m unit              # Fast unit tests only
- pytest                      # All tests
"""
import pytest


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")


@pytest.fixture
def sample_document():
    """
    A small document in the current shape, two families.

    Both families have a person coded LAUREN so family scoping is visible.
    """
    return {
        "people": [
            {"code": "LAUREN", "name": "Lauren", "preferences": "Likes red", "family": "default"},
            {"code": "SAM", "name": "Sam", "preferences": "", "family": "default"},
            {"code": "LAUREN", "name": "Lauren R", "preferences": "", "family": "Rigsby"},
        ],
        "items": [
            {
                "id": 1, "recipientCode": "LAUREN", "recipientName": "Lauren",
                "itemName": "Bike", "details": "Blue", "url": "", "tags": ["outdoor"],
                "claimedByCode": None, "family": "default",
            },
            {
                "id": 2, "recipientCode": "LAUREN", "recipientName": "Lauren",
                "itemName": "Book", "details": "", "url": "", "tags": [],
                "claimedByCode": "SAM", "family": "default",
            },
            {
                "id": 3, "recipientCode": "SAM", "recipientName": "Sam",
                "itemName": "Socks", "details": "", "url": "", "tags": [],
                "claimedByCode": None, "family": "default",
            },
            {
                "id": 4, "recipientCode": "LAUREN", "recipientName": "Lauren R",
                "itemName": "Scarf", "details": "", "url": "", "tags": [],
                "claimedByCode": None, "family": "Rigsby",
            },
        ],
    }


@pytest.fixture
def memory_store(sample_document):
    """In-memory store seeded with the sample document."""
    from api.services.data_store import InMemoryDataStore
    return InMemoryDataStore(sample_document)


@pytest.fixture
def file_store(tmp_path):
    """JSON file store in a temp directory (file not yet created)."""
    from api.services.data_store import JsonFileDataStore
    return JsonFileDataStore(file_path=str(tmp_path / "data.json"))


@pytest.fixture
def client(memory_store):
    """Test client whose routes use the in-memory store."""
    from fastapi.testclient import TestClient
    from api.main import app
    from api.services.data_store import get_data_store

    app.dependency_overrides[get_data_store] = lambda: memory_store
    yield TestClient(app)
    app.dependency_overrides.clear()
