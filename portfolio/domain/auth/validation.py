# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Form checks that run before the credential store is touched."""

from __future__ import annotations

import re
from enum import Enum

# Format check only: local@domain.tld, no whitespace, no second "@".
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class ValidationReason(str, Enum):
    EMPTY_FIELDS = "empty_fields"
    INVALID_EMAIL = "invalid_email"
    PASSWORD_TOO_SHORT = "password_too_short"
    PASSWORD_MISMATCH = "password_mismatch"


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email))


def validate_login(email: str, password: str) -> ValidationReason | None:
    if not email.strip() or not password.strip():
        return ValidationReason.EMPTY_FIELDS
    if not is_valid_email(email.strip()):
        return ValidationReason.INVALID_EMAIL
    return None


def validate_registration(
    email: str, password: str, confirm: str, *, min_password_length: int
) -> ValidationReason | None:
    if not email.strip() or not password.strip() or not confirm.strip():
        return ValidationReason.EMPTY_FIELDS
    if not is_valid_email(email.strip()):
        return ValidationReason.INVALID_EMAIL
    if len(password) < min_password_length:
        return ValidationReason.PASSWORD_TOO_SHORT
    if password != confirm:
        return ValidationReason.PASSWORD_MISMATCH
    return None
