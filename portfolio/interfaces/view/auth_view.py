# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Console view layer for the authentication gate.

Plays the part of the page: renders either the sign-in screen or the
portfolio, shows inline form messages, and raises a separate alert when
the background check expires the session.
"""

from __future__ import annotations

from collections.abc import Callable

from portfolio.application.services.session_manager import SessionManager
from portfolio.domain.auth.entities import SessionEvent
from portfolio.domain.auth.exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    ValidationFailedError,
)
from portfolio.domain.auth.validation import ValidationReason
from portfolio.shared.errors.base import AppError
from portfolio.shared.logging import logger

LOGOUT_PROMPT = "Are you sure you want to logout?"
EXPIRED_ALERT = "Your session has expired. Please login again."
INVALID_CREDENTIALS = "Invalid email or password."
DUPLICATE_EMAIL = "An account with this email already exists."

_REASON_MESSAGES = {
    ValidationReason.EMPTY_FIELDS: "Please fill in all fields.",
    ValidationReason.INVALID_EMAIL: "Please enter a valid email address.",
    ValidationReason.PASSWORD_MISMATCH: "Passwords do not match.",
}


def logout_label(user: str) -> str:
    return f"{user} · Logout"


class AuthView:
    def __init__(
        self,
        sessions: SessionManager,
        *,
        echo: Callable[[str], None] = print,
        alert: Callable[[str], None] | None = None,
    ) -> None:
        self._sessions = sessions
        self._echo = echo
        self._alert = alert or (lambda text: echo(f"[!] {text}"))
        self.last_message: str = ""
        self._subscribers: list[Callable[[SessionEvent, str | None], None]] = []
        sessions.set_listener(self)

    def message_for(self, error: AppError) -> str:
        if isinstance(error, ValidationFailedError):
            if error.reason is ValidationReason.PASSWORD_TOO_SHORT:
                n = self._sessions.config.min_password_length
                return f"Password must be at least {n} characters."
            return _REASON_MESSAGES[error.reason]
        if isinstance(error, InvalidCredentialsError):
            return INVALID_CREDENTIALS
        if isinstance(error, DuplicateEmailError):
            return DUPLICATE_EMAIL
        return "Something went wrong. Please try again."

    def render(self) -> str:
        user = self._sessions.current_user()
        if user is None:
            screen = "Sign in\nEnter your credentials to access the portfolio."
        else:
            screen = f"Portfolio\n[{logout_label(user)}]"
        self._echo(screen)
        return screen

    def submit_login(self, email: str, password: str) -> bool:
        return self._submit(lambda: self._sessions.login(email, password))

    def submit_register(self, email: str, password: str, confirm: str) -> bool:
        return self._submit(lambda: self._sessions.register(email, password, confirm))

    def request_logout(self, confirm: Callable[[str], bool]) -> bool:
        if self._sessions.current_user() is None:
            return False
        if not confirm(LOGOUT_PROMPT):
            return False
        return self._sessions.logout()

    def subscribe(self, callback: Callable[[SessionEvent, str | None], None]) -> None:
        self._subscribers.append(callback)

    def clear_message(self) -> None:
        self.last_message = ""

    def on_session_changed(self, event: SessionEvent, user: str | None) -> None:
        logger.debug(f"view: session event {event.value}")
        if event is SessionEvent.EXPIRED:
            self._alert(EXPIRED_ALERT)
        self.clear_message()
        self.render()
        for callback in self._subscribers:
            callback(event, user)

    def _submit(self, action: Callable[[], str]) -> bool:
        try:
            action()
        except (ValidationFailedError, InvalidCredentialsError, DuplicateEmailError) as exc:
            self.last_message = self.message_for(exc)
            self._echo(self.last_message)
            return False
        return True


__all__ = ["AuthView", "EXPIRED_ALERT", "LOGOUT_PROMPT", "logout_label"]
