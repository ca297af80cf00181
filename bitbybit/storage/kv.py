from __future__ import annotations

import json
import logging
import os
import re
from functools import lru_cache
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any, Protocol

from bitbybit.config import get_settings

logger = logging.getLogger(__name__)


class StorageKeys:
    COURSES = "bit_by_bit_courses"
    ROUNDS = "bit_by_bit_rounds"


STORAGE_KEYS = StorageKeys()

SAFE_KEY_RE = re.compile(r"^[A-Za-z0-9_-]+$")


class StorageError(Exception):
    pass


class KeyValueStore(Protocol):
    def load(self, key: str) -> Any | None: ...

    def save(self, key: str, value: Any) -> None: ...

    def delete(self, key: str) -> None: ...


def _sanitize_key(key: str) -> str:
    """
    Restrict keys to filesystem-safe characters to prevent path traversal.

    Only allow ASCII letters, digits, underscores, and dashes. Reject anything else.
    """

    if not SAFE_KEY_RE.match(key or ""):
        raise ValueError(f"Invalid storage key: {key!r}")
    return key


class JsonFileStore:
    """One JSON document per key under ``base_dir``."""

    def __init__(self, base_dir: Path | str | None = None) -> None:
        base = Path(base_dir or get_settings().data_dir).expanduser()
        self._base_dir = base.resolve()

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def _path(self, key: str) -> Path:
        return self._base_dir / f"{_sanitize_key(key)}.json"

    def load(self, key: str) -> Any | None:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.exception("failed to load stored value", extra={"key": key})
            raise StorageError(f"failed to load {key!r}") from exc

    def save(self, key: str, value: Any) -> None:
        path = self._path(key)
        try:
            payload = json.dumps(value, indent=2, sort_keys=True)
        except (TypeError, ValueError) as exc:
            raise StorageError(f"value for {key!r} is not JSON serialisable") from exc
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with NamedTemporaryFile(
                "w", dir=path.parent, delete=False, encoding="utf-8"
            ) as tmp:
                tmp.write(payload)
                tmp.flush()
                os.fsync(tmp.fileno())
                temp_name = tmp.name
            os.replace(temp_name, path)
        except OSError as exc:
            logger.exception("failed to save value", extra={"key": key})
            raise StorageError(f"failed to save {key!r}") from exc

    def delete(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            logger.exception("failed to delete value", extra={"key": key})
            raise StorageError(f"failed to delete {key!r}") from exc


@lru_cache(maxsize=1)
def get_store() -> JsonFileStore:
    return JsonFileStore()


__all__ = [
    "STORAGE_KEYS",
    "JsonFileStore",
    "KeyValueStore",
    "StorageError",
    "get_store",
]
