# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from portfolio.interfaces.http.dto.contact import ContactRequestDTO, ContactSuccessDTO
from portfolio.shared.errors import ValidationError as AppValidationError
from portfolio.shared.errors.validation import format_pydantic_errors
from portfolio.shared.logging import logger

FILL_ALL_FIELDS = "Please fill all fields"


def _read_payload() -> dict[str, Any]:
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        return payload
    return request.form.to_dict()


class ContactController:
    def submit(self) -> tuple[Response, int]:
        try:
            dto = ContactRequestDTO.model_validate(_read_payload())
        except ValidationError as exc:
            fields = format_pydantic_errors(exc)["fields"]
            logger.info(f"contact.submit: missing form data fields={fields}")
            raise AppValidationError("contact_fields_missing", message=FILL_ALL_FIELDS) from exc

        logger.info(
            f"contact.submit: new message name={dto.name!r} email={dto.email} "
            f"length={len(dto.message)}"
        )
        logger.debug(f"contact.submit: message={dto.message!r}")
        return jsonify(ContactSuccessDTO().model_dump()), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("contact", __name__)
        bp.add_url_rule("/contact", view_func=self.submit, methods=["POST"])
        return bp
