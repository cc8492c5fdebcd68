# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import SessionEvent, SessionRecord, SessionState
from .exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    StorageUnavailableError,
    ValidationFailedError,
)
from .validation import ValidationReason, is_valid_email, validate_login, validate_registration

__all__ = [
    "DuplicateEmailError",
    "InvalidCredentialsError",
    "SessionEvent",
    "SessionRecord",
    "SessionState",
    "StorageUnavailableError",
    "ValidationFailedError",
    "ValidationReason",
    "is_valid_email",
    "validate_login",
    "validate_registration",
]
