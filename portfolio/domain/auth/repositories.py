# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import SessionEvent


class KeyValueStorage(Protocol):
    """String-to-string namespace, the shape of browser local storage.

    Adapters raise ``StorageUnavailableError`` when the backing store
    cannot be read or written.
    """

    def get_item(self, key: str) -> str | None: ...
    def set_item(self, key: str, value: str) -> None: ...
    def remove_item(self, key: str) -> None: ...


class CredentialStore(Protocol):
    def load(self) -> dict[str, str]: ...
    def save(self, users: dict[str, str]) -> None: ...
    def register(self, email: str, password: str) -> None: ...
    def verify(self, email: str, password: str) -> bool: ...


class SessionListener(Protocol):
    def on_session_changed(self, event: SessionEvent, user: str | None) -> None: ...
