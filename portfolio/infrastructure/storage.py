# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Key-value storage adapters standing in for browser local storage."""

from __future__ import annotations

import threading
from pathlib import Path

from portfolio.domain.auth.exceptions import StorageUnavailableError
from portfolio.domain.auth.repositories import KeyValueStorage
from portfolio.shared.logging import logger
from portfolio.shared.utils.fs import read_json_object, write_json_atomic

SCHEMA_VERSION = 1
_PREFIX = f"portfolio.auth.v{SCHEMA_VERSION}"

USERS_KEY = f"{_PREFIX}.users"
SESSION_USER_KEY = f"{_PREFIX}.session_user"
SESSION_TIME_KEY = f"{_PREFIX}.session_time"


class InMemoryStorage(KeyValueStorage):
    """Process-local storage with an optional quota on the total stored size."""

    def __init__(self, *, quota_bytes: int | None = None) -> None:
        self._items: dict[str, str] = {}
        self._quota = quota_bytes

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self._quota is not None:
            size = sum(len(k) + len(v) for k, v in self._items.items() if k != key)
            if size + len(key) + len(value) > self._quota:
                raise StorageUnavailableError(
                    operation="set", key=key, context={"reason": "quota_exceeded"}
                )
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._items)


class JsonFileStorage(KeyValueStorage):
    """All keys of one profile kept in a single JSON object on disk.

    Every call re-reads the file so that separate processes sharing a
    profile see each other's writes; concurrent writers are not coordinated.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _read(self, operation: str, key: str) -> dict[str, str]:
        try:
            data = read_json_object(self._path)
        except (OSError, ValueError) as exc:
            raise StorageUnavailableError(
                operation=operation, key=key, context={"reason": type(exc).__name__}
            ) from exc
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: dict[str, str], operation: str, key: str) -> None:
        try:
            write_json_atomic(self._path, data)
        except OSError as exc:
            raise StorageUnavailableError(
                operation=operation, key=key, context={"reason": type(exc).__name__}
            ) from exc

    def get_item(self, key: str) -> str | None:
        with self._lock:
            return self._read("get", key).get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read("set", key)
            data[key] = value
            self._write(data, "set", key)
        logger.debug(f"storage: set key={key} path={self._path}")

    def remove_item(self, key: str) -> None:
        with self._lock:
            data = self._read("remove", key)
            if data.pop(key, None) is None:
                return
            self._write(data, "remove", key)
        logger.debug(f"storage: removed key={key} path={self._path}")


def build_storage(path: Path | None) -> KeyValueStorage:
    if path is None:
        return InMemoryStorage()
    return JsonFileStorage(path)


__all__ = [
    "InMemoryStorage",
    "JsonFileStorage",
    "KeyValueStorage",
    "SCHEMA_VERSION",
    "SESSION_TIME_KEY",
    "SESSION_USER_KEY",
    "USERS_KEY",
    "build_storage",
]
