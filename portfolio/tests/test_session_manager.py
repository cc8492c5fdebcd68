from __future__ import annotations

import pytest

from portfolio.application.services.session_manager import SessionManager
from portfolio.domain.auth.entities import SessionEvent, SessionState
from portfolio.domain.auth.exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    ValidationFailedError,
)
from portfolio.domain.auth.validation import ValidationReason
from portfolio.infrastructure.credential_store import LocalCredentialStore
from portfolio.infrastructure.storage import (
    SESSION_TIME_KEY,
    SESSION_USER_KEY,
    USERS_KEY,
    InMemoryStorage,
)
from portfolio.shared.config import AuthConfig

HOUR_MS = 60 * 60 * 1000
START_MS = 1_708_099_200_000


class FakeClock:
    def __init__(self, now: int = START_MS) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class RecordingListener:
    def __init__(self) -> None:
        self.events: list[tuple[SessionEvent, str | None]] = []

    def on_session_changed(self, event: SessionEvent, user: str | None) -> None:
        self.events.append((event, user))


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture()
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture()
def manager(
    storage: InMemoryStorage, clock: FakeClock, listener: RecordingListener
) -> SessionManager:
    return SessionManager(
        storage=storage,
        credentials=LocalCredentialStore(storage),
        config=AuthConfig(session_duration_ms=24 * HOUR_MS, min_password_length=4),
        listener=listener,
        clock=clock,
    )


def test_register_logs_the_new_user_in(manager: SessionManager, storage: InMemoryStorage) -> None:
    assert manager.register("a@x.com", "pass1", "pass1") == "a@x.com"

    assert manager.state is SessionState.AUTHENTICATED
    assert manager.current_user() == "a@x.com"
    assert storage.get_item(SESSION_USER_KEY) == "a@x.com"
    assert storage.get_item(SESSION_TIME_KEY) == str(START_MS)


def test_full_scenario(manager: SessionManager, listener: RecordingListener) -> None:
    manager.register("a@x.com", "pass1", "pass1")
    assert manager.current_user() == "a@x.com"

    assert manager.logout() is True
    assert manager.state is SessionState.ANONYMOUS

    with pytest.raises(InvalidCredentialsError):
        manager.login("a@x.com", "wrong")
    assert manager.current_user() is None

    manager.login("a@x.com", "pass1")
    assert manager.current_user() == "a@x.com"

    assert [event for event, _ in listener.events] == [
        SessionEvent.AUTHENTICATED,
        SessionEvent.LOGGED_OUT,
        SessionEvent.AUTHENTICATED,
    ]


def test_login_unknown_email_is_invalid_credentials(manager: SessionManager) -> None:
    with pytest.raises(InvalidCredentialsError):
        manager.login("ghost@x.com", "pass1")


def test_login_trims_email(manager: SessionManager) -> None:
    manager.register("a@x.com", "pass1", "pass1")
    manager.logout()

    assert manager.login("  a@x.com ", "pass1") == "a@x.com"
    assert manager.current_user() == "a@x.com"


def test_duplicate_registration_keeps_state(manager: SessionManager) -> None:
    manager.register("a@x.com", "pass1", "pass1")
    manager.logout()

    with pytest.raises(DuplicateEmailError):
        manager.register("a@x.com", "other", "other")

    assert manager.current_user() is None
    manager.login("a@x.com", "pass1")
    assert manager.current_user() == "a@x.com"


@pytest.mark.parametrize(
    ("email", "password", "confirm", "reason"),
    [
        ("", "pass1", "pass1", ValidationReason.EMPTY_FIELDS),
        ("a@x.com", "   ", "   ", ValidationReason.EMPTY_FIELDS),
        ("a@x.com", "pass1", "", ValidationReason.EMPTY_FIELDS),
        ("not-an-email", "pass1", "pass1", ValidationReason.INVALID_EMAIL),
        ("a@x.com", "abc", "abc", ValidationReason.PASSWORD_TOO_SHORT),
        ("a@x.com", "pass1", "pass2", ValidationReason.PASSWORD_MISMATCH),
    ],
)
def test_register_validation_does_not_touch_store(
    manager: SessionManager,
    storage: InMemoryStorage,
    email: str,
    password: str,
    confirm: str,
    reason: ValidationReason,
) -> None:
    with pytest.raises(ValidationFailedError) as exc_info:
        manager.register(email, password, confirm)

    assert exc_info.value.reason is reason
    assert exc_info.value.context == {"reason": reason.value}
    assert storage.keys() == []


def test_login_validation(manager: SessionManager) -> None:
    with pytest.raises(ValidationFailedError) as exc_info:
        manager.login(" ", "pass1")
    assert exc_info.value.reason is ValidationReason.EMPTY_FIELDS

    with pytest.raises(ValidationFailedError) as exc_info:
        manager.login("a@x", "pass1")
    assert exc_info.value.reason is ValidationReason.INVALID_EMAIL


def test_current_user_lazily_expires(
    manager: SessionManager, storage: InMemoryStorage, clock: FakeClock
) -> None:
    manager.register("a@x.com", "pass1", "pass1")

    clock.advance(24 * HOUR_MS)
    assert manager.current_user() == "a@x.com"

    clock.advance(1)
    assert manager.current_user() is None
    assert storage.get_item(SESSION_USER_KEY) is None
    assert storage.get_item(SESSION_TIME_KEY) is None
    assert manager.current_user() is None


def test_stale_login_time_is_cleared_on_read(
    manager: SessionManager, storage: InMemoryStorage, clock: FakeClock
) -> None:
    manager.register("a@x.com", "pass1", "pass1")
    storage.set_item(SESSION_TIME_KEY, str(clock.now - 25 * HOUR_MS))

    assert manager.current_user() is None
    assert storage.keys() == [USERS_KEY]


@pytest.mark.parametrize(
    "items",
    [
        {SESSION_USER_KEY: "a@x.com"},
        {SESSION_TIME_KEY: str(START_MS)},
        {SESSION_USER_KEY: "a@x.com", SESSION_TIME_KEY: "yesterday"},
        {SESSION_USER_KEY: "a@x.com", SESSION_TIME_KEY: "0"},
    ],
)
def test_partial_session_record_counts_as_absent(
    manager: SessionManager, storage: InMemoryStorage, items: dict[str, str]
) -> None:
    for key, value in items.items():
        storage.set_item(key, value)

    assert manager.current_user() is None
    assert manager.state is SessionState.ANONYMOUS
    assert storage.keys() == []


def test_logout_when_anonymous_is_noop(
    manager: SessionManager, listener: RecordingListener
) -> None:
    assert manager.logout() is False
    assert manager.logout() is False
    assert manager.state is SessionState.ANONYMOUS
    assert listener.events == []


def test_check_expiry_signals_expired_once(
    manager: SessionManager, listener: RecordingListener, clock: FakeClock
) -> None:
    manager.register("a@x.com", "pass1", "pass1")
    assert manager.check_expiry() is False

    clock.advance(25 * HOUR_MS)
    assert manager.check_expiry() is True
    assert manager.check_expiry() is False

    assert listener.events[-1] == (SessionEvent.EXPIRED, "a@x.com")
    assert [e for e, _ in listener.events].count(SessionEvent.EXPIRED) == 1


def test_login_time_accessor(manager: SessionManager, clock: FakeClock) -> None:
    assert manager.login_time() is None
    manager.register("a@x.com", "pass1", "pass1")
    assert manager.login_time() == START_MS


def test_instances_are_independent(clock: FakeClock) -> None:
    config = AuthConfig()
    first_storage, second_storage = InMemoryStorage(), InMemoryStorage()
    first = SessionManager(
        storage=first_storage,
        credentials=LocalCredentialStore(first_storage),
        config=config,
        clock=clock,
    )
    second = SessionManager(
        storage=second_storage,
        credentials=LocalCredentialStore(second_storage),
        config=config,
        clock=clock,
    )

    first.register("a@x.com", "pass1", "pass1")

    assert first.current_user() == "a@x.com"
    assert second.current_user() is None


def test_storage_failure_degrades_to_anonymous(clock: FakeClock) -> None:
    storage = InMemoryStorage(quota_bytes=60)
    manager = SessionManager(
        storage=storage,
        credentials=LocalCredentialStore(storage),
        config=AuthConfig(),
        clock=clock,
    )

    manager.register("a@x.com", "pass1", "pass1")

    assert manager.current_user() is None


def test_listener_errors_do_not_break_transitions(
    storage: InMemoryStorage, clock: FakeClock
) -> None:
    class Broken:
        def on_session_changed(self, event: SessionEvent, user: str | None) -> None:
            raise RuntimeError("view crashed")

    manager = SessionManager(
        storage=storage,
        credentials=LocalCredentialStore(storage),
        config=AuthConfig(),
        listener=Broken(),
        clock=clock,
    )

    manager.register("a@x.com", "pass1", "pass1")

    assert manager.current_user() == "a@x.com"
