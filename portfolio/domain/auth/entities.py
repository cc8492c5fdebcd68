# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SessionState(str, Enum):
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


class SessionEvent(str, Enum):
    """Why the session changed; the view words each one differently."""

    AUTHENTICATED = "authenticated"
    LOGGED_OUT = "logged_out"
    EXPIRED = "expired"


@dataclass(slots=True, frozen=True)
class SessionRecord:

    user: str
    login_time: int  # epoch milliseconds

    def elapsed_ms(self, now_ms: int) -> int:
        return now_ms - self.login_time

    def is_expired(self, now_ms: int, duration_ms: int) -> bool:
        return self.elapsed_ms(now_ms) > duration_ms
