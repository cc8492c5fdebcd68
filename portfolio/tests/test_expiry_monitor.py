from __future__ import annotations

import threading

from portfolio.application.services.expiry_monitor import ExpiryMonitor
from portfolio.application.services.session_manager import SessionManager
from portfolio.domain.auth.entities import SessionEvent
from portfolio.infrastructure.credential_store import LocalCredentialStore
from portfolio.infrastructure.storage import InMemoryStorage
from portfolio.shared.config import AuthConfig


class ExpiryListener:
    def __init__(self) -> None:
        self.expired = threading.Event()
        self.events: list[SessionEvent] = []

    def on_session_changed(self, event: SessionEvent, user: str | None) -> None:
        self.events.append(event)
        if event is SessionEvent.EXPIRED:
            self.expired.set()


def test_monitor_calls_check_until_stopped() -> None:
    calls = threading.Semaphore(0)

    def check() -> bool:
        calls.release()
        return False

    monitor = ExpiryMonitor(check, interval=0.01).start()
    try:
        assert calls.acquire(timeout=2)
        assert calls.acquire(timeout=2)
        assert monitor.running
    finally:
        monitor.stop()

    assert not monitor.running


def test_monitor_survives_failing_check() -> None:
    calls = threading.Semaphore(0)

    def check() -> bool:
        calls.release()
        raise RuntimeError("boom")

    monitor = ExpiryMonitor(check, interval=0.01).start()
    try:
        assert calls.acquire(timeout=2)
        assert calls.acquire(timeout=2)
    finally:
        monitor.stop()


def test_session_manager_monitor_expires_session() -> None:
    now = {"ms": 1_000_000}
    storage = InMemoryStorage()
    listener = ExpiryListener()
    manager = SessionManager(
        storage=storage,
        credentials=LocalCredentialStore(storage),
        config=AuthConfig(session_duration_ms=1000, check_interval_ms=10),
        listener=listener,
        clock=lambda: now["ms"],
    )
    manager.register("a@x.com", "pass1", "pass1")

    monitor = manager.start_monitoring()
    try:
        assert manager.start_monitoring() is monitor
        now["ms"] += 1001
        assert listener.expired.wait(timeout=2)
    finally:
        manager.stop_monitoring()

    assert not monitor.running
    assert manager.current_user() is None
    assert listener.events == [SessionEvent.AUTHENTICATED, SessionEvent.EXPIRED]


def test_stop_monitoring_without_monitor_is_noop() -> None:
    storage = InMemoryStorage()
    manager = SessionManager(
        storage=storage,
        credentials=LocalCredentialStore(storage),
        config=AuthConfig(),
    )

    manager.stop_monitoring()
