# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import threading
import time
from collections.abc import Callable

from portfolio.application.services.expiry_monitor import ExpiryMonitor
from portfolio.domain.auth.entities import SessionEvent, SessionRecord, SessionState
from portfolio.domain.auth.exceptions import (
    InvalidCredentialsError,
    StorageUnavailableError,
    ValidationFailedError,
)
from portfolio.domain.auth.repositories import CredentialStore, KeyValueStorage, SessionListener
from portfolio.domain.auth.validation import validate_login, validate_registration
from portfolio.infrastructure.storage import SESSION_TIME_KEY, SESSION_USER_KEY
from portfolio.shared.config import AuthConfig
from portfolio.shared.logging import logger


def now_ms() -> int:
    return int(time.time() * 1000)


class SessionManager:
    """Anonymous/Authenticated state machine over one persisted session record.

    The record lives in ``storage`` under two keys (user and login time); a
    record missing either half counts as no session. Expiry is detected
    lazily by ``current_user()`` and proactively by the monitor started with
    ``start_monitoring()``.
    """

    def __init__(
        self,
        *,
        storage: KeyValueStorage,
        credentials: CredentialStore,
        config: AuthConfig,
        listener: SessionListener | None = None,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._storage = storage
        self._credentials = credentials
        self._config = config
        self._listener = listener
        self._clock = clock
        # The monitor thread and form handlers both mutate the record.
        self._lock = threading.RLock()
        self._monitor: ExpiryMonitor | None = None

    @property
    def config(self) -> AuthConfig:
        return self._config

    def set_listener(self, listener: SessionListener | None) -> None:
        self._listener = listener

    # Transitions

    def login(self, email: str, password: str) -> str:
        reason = validate_login(email, password)
        if reason is not None:
            raise ValidationFailedError(reason)
        email = email.strip()
        with self._lock:
            if not self._credentials.verify(email, password):
                logger.info(f"session.login: rejected email={email}")
                raise InvalidCredentialsError()
            self._write_session(email)
        logger.info(f"session.login: ok email={email}")
        self._notify(SessionEvent.AUTHENTICATED, email)
        return email

    def register(self, email: str, password: str, confirm: str) -> str:
        reason = validate_registration(
            email, password, confirm, min_password_length=self._config.min_password_length
        )
        if reason is not None:
            raise ValidationFailedError(reason)
        email = email.strip()
        with self._lock:
            self._credentials.register(email, password)
            self._write_session(email)
        logger.info(f"session.register: ok email={email}")
        self._notify(SessionEvent.AUTHENTICATED, email)
        return email

    def logout(self) -> bool:
        """Drop the session record; returns False when there was none."""
        with self._lock:
            record = self._read_session()
            self._clear_session()
        if record is None:
            return False
        logger.info(f"session.logout: ok email={record.user}")
        self._notify(SessionEvent.LOGGED_OUT, record.user)
        return True

    def check_expiry(self) -> bool:
        """Clear the record and signal EXPIRED if it outlived the session duration."""
        with self._lock:
            record = self._read_session()
            if record is None or not record.is_expired(self._clock(), self._config.session_duration_ms):
                return False
            self._clear_session()
        logger.info(f"session.expired: email={record.user}")
        self._notify(SessionEvent.EXPIRED, record.user)
        return True

    # Queries

    def current_user(self) -> str | None:
        with self._lock:
            record = self._read_session()
            if record is None:
                if self._has_partial_session():
                    self._clear_session()
                return None
            if record.is_expired(self._clock(), self._config.session_duration_ms):
                logger.info(f"session.current_user: stale record cleared email={record.user}")
                self._clear_session()
                return None
            return record.user

    def login_time(self) -> int | None:
        with self._lock:
            if self.current_user() is None:
                return None
            record = self._read_session()
            return record.login_time if record else None

    @property
    def state(self) -> SessionState:
        if self.current_user() is None:
            return SessionState.ANONYMOUS
        return SessionState.AUTHENTICATED

    @property
    def is_authenticated(self) -> bool:
        return self.state is SessionState.AUTHENTICATED

    # Background expiry

    def start_monitoring(self) -> ExpiryMonitor:
        with self._lock:
            if self._monitor is not None and self._monitor.running:
                return self._monitor
            self._monitor = ExpiryMonitor(
                self.check_expiry, interval=self._config.check_interval_seconds
            ).start()
            return self._monitor

    def stop_monitoring(self) -> None:
        with self._lock:
            monitor, self._monitor = self._monitor, None
        if monitor is not None:
            monitor.stop()

    # Session record persistence

    def _read_session(self) -> SessionRecord | None:
        try:
            user = self._storage.get_item(SESSION_USER_KEY)
            raw_time = self._storage.get_item(SESSION_TIME_KEY)
        except StorageUnavailableError as exc:
            logger.warning(f"session.read: storage unavailable ({exc.code})")
            return None
        if not user or not raw_time:
            return None
        try:
            login_time = int(raw_time)
        except ValueError:
            return None
        if login_time <= 0:
            return None
        return SessionRecord(user=user, login_time=login_time)

    def _has_partial_session(self) -> bool:
        try:
            return any(
                self._storage.get_item(key) is not None
                for key in (SESSION_USER_KEY, SESSION_TIME_KEY)
            )
        except StorageUnavailableError:
            return False

    def _write_session(self, email: str) -> None:
        try:
            self._storage.set_item(SESSION_USER_KEY, email)
            self._storage.set_item(SESSION_TIME_KEY, str(self._clock()))
        except StorageUnavailableError as exc:
            logger.error(f"session.write: failed ({exc.code})")

    def _clear_session(self) -> None:
        try:
            self._storage.remove_item(SESSION_USER_KEY)
            self._storage.remove_item(SESSION_TIME_KEY)
        except StorageUnavailableError as exc:
            logger.error(f"session.clear: failed ({exc.code})")

    def _notify(self, event: SessionEvent, user: str | None) -> None:
        if self._listener is None:
            return
        try:
            self._listener.on_session_changed(event, user)
        except Exception:
            logger.exception(f"session.notify: listener failed on {event.value}")


__all__ = ["SessionManager", "now_ms"]
