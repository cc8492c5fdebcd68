# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import json

from portfolio.domain.auth.exceptions import DuplicateEmailError, StorageUnavailableError
from portfolio.domain.auth.repositories import CredentialStore, KeyValueStorage
from portfolio.infrastructure.storage import USERS_KEY
from portfolio.shared.logging import logger


class LocalCredentialStore(CredentialStore):
    """Email to plaintext password map kept as one JSON object.

    Demo behaviour: no hashing and exact, case-sensitive matching.
    """

    def __init__(self, storage: KeyValueStorage, *, key: str = USERS_KEY) -> None:
        self._storage = storage
        self._key = key

    def load(self) -> dict[str, str]:
        try:
            raw = self._storage.get_item(self._key)
        except StorageUnavailableError as exc:
            logger.warning(f"credentials.load: storage unavailable ({exc.code})")
            return {}
        if raw is None:
            return {}
        try:
            loaded = json.loads(raw)
        except ValueError as exc:
            logger.warning(f"credentials.load: corrupt users blob ({exc})")
            return {}
        if not isinstance(loaded, dict):
            logger.warning(f"credentials.load: users blob is {type(loaded).__name__}, not an object")
            return {}
        return {k: v for k, v in loaded.items() if isinstance(k, str) and isinstance(v, str)}

    def save(self, users: dict[str, str]) -> None:
        try:
            self._storage.set_item(self._key, json.dumps(users, ensure_ascii=False))
        except StorageUnavailableError as exc:
            logger.error(f"credentials.save: failed, {len(users)} users not persisted ({exc.code})")

    def register(self, email: str, password: str) -> None:
        users = self.load()
        if email in users:
            raise DuplicateEmailError()
        users[email] = password
        self.save(users)
        logger.info(f"credentials.register: stored email={email} total={len(users)}")

    def verify(self, email: str, password: str) -> bool:
        stored = self.load().get(email)
        return stored is not None and stored == password


__all__ = ["LocalCredentialStore"]
