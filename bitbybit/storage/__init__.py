"""Local key-value persistence."""

from .kv import (
    STORAGE_KEYS,
    JsonFileStore,
    KeyValueStore,
    StorageError,
    get_store,
)

__all__ = [
    "STORAGE_KEYS",
    "JsonFileStore",
    "KeyValueStore",
    "StorageError",
    "get_store",
]
