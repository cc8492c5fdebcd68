# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from http import HTTPStatus
from typing import Any

from portfolio.shared.errors.base import DomainError, InfrastructureError

from .validation import ValidationReason


class DuplicateEmailError(DomainError):
    code = "duplicate_email"
    status = HTTPStatus.CONFLICT


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED


class ValidationFailedError(DomainError):
    code = "validation_failed"
    status = HTTPStatus.BAD_REQUEST

    def __init__(self, reason: ValidationReason) -> None:
        super().__init__(context={"reason": reason.value})
        self.reason = reason


class StorageUnavailableError(InfrastructureError):
    def __init__(self, *, operation: str, key: str, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(
            "storage_unavailable",
            status=HTTPStatus.SERVICE_UNAVAILABLE,
            context={"operation": operation, "key": key, **(context or {})},
        )
        self.operation = operation
        self.key = key
