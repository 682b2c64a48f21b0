"""
Data Store for the family wishlist.

The whole wishlist is one JSON document: ``{"people": [...], "items": [...]}``.
Every load reads and normalizes the full document; every save rewrites it
in full. There is no locking, so concurrent writers race and the last
write wins.

Storage: JSON file at ``settings.data_path`` (default ./data.json).
"""
import copy
import json
import logging
from pathlib import Path
from typing import Optional

from api.services.errors import StorageError
from api.services.normalizer import normalize_data
from api.services.wishlist_models import WishlistData
from config.settings import settings

logger = logging.getLogger(__name__)

EMPTY_DOCUMENT = {"people": [], "items": []}


class DataStore:
    """Storage interface: load the whole document, save the whole document."""

    def load(self) -> WishlistData:
        raise NotImplementedError

    def save(self, data: WishlistData) -> None:
        raise NotImplementedError


class JsonFileDataStore(DataStore):
    """
    Persists the wishlist to a JSON file.

    The file is created with an empty document on first load.
    """

    def __init__(self, file_path: Optional[str] = None):
        self.file_path = Path(file_path) if file_path else Path(settings.data_path)

    def _write(self, document: dict):
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.file_path, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2)
        except OSError as e:
            logger.error(f"Error writing {self.file_path}: {e}")
            raise StorageError("Failed to save data.") from e

    def load(self) -> WishlistData:
        if not self.file_path.exists():
            logger.info(f"No data file at {self.file_path}, creating an empty one")
            initial = copy.deepcopy(EMPTY_DOCUMENT)
            self._write(initial)
            return normalize_data(initial)

        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Data file {self.file_path} is not valid JSON: {e}")
            raise StorageError("Failed to read data.") from e
        except OSError as e:
            logger.error(f"Error reading {self.file_path}: {e}")
            raise StorageError("Failed to read data.") from e

        return normalize_data(raw)

    def save(self, data: WishlistData) -> None:
        self._write(data.to_dict())


class InMemoryDataStore(DataStore):
    """Keeps the serialized document in memory. Used by tests."""

    def __init__(self, document: Optional[dict] = None):
        self.document = copy.deepcopy(document) if document is not None else copy.deepcopy(EMPTY_DOCUMENT)
        self.save_count = 0

    def load(self) -> WishlistData:
        return normalize_data(copy.deepcopy(self.document))

    def save(self, data: WishlistData) -> None:
        self.document = copy.deepcopy(data.to_dict())
        self.save_count += 1


# ---------------------------------------------------------------------------
# Singleton
# ---------------------------------------------------------------------------

_data_store: Optional[DataStore] = None


def get_data_store() -> DataStore:
    global _data_store
    if _data_store is None:
        _data_store = JsonFileDataStore()
    return _data_store


def reset_data_store() -> None:
    """Drop the cached store so the next call re-reads settings."""
    global _data_store
    _data_store = None
