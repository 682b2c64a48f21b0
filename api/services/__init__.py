"""
Family Wishlist Services Package.

This package contains the business logic and data access services.

Example:
    from api.services import WishlistService, get_data_store

    service = WishlistService(get_data_store())
    service.claim("LAUREN", 3)

Key service modules:
- wishlist_models: Person, Item and WishlistData
- normalizer: legacy field migration on load
- data_store: JSON file / in-memory storage
- csv_import: CSV text parsing and item mapping
- wishlist: claim, import and admin operations
"""

from api.services.data_store import (
    DataStore,
    InMemoryDataStore,
    JsonFileDataStore,
    get_data_store,
)
from api.services.errors import WishlistError
from api.services.wishlist import WishlistService
from api.services.wishlist_models import Item, Person, WishlistData


__all__ = [
    "DataStore",
    "InMemoryDataStore",
    "JsonFileDataStore",
    "get_data_store",
    "WishlistError",
    "WishlistService",
    "Item",
    "Person",
    "WishlistData",
]
