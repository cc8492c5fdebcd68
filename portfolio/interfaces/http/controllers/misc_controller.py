# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, jsonify

from portfolio.interfaces.http.dto.contact import StatusDTO


class MiscController:
    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/", view_func=self.status, methods=["GET"])
        return bp

    def status(self):
        return jsonify(StatusDTO().model_dump())
