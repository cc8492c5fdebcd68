# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Response, jsonify
from werkzeug.exceptions import HTTPException, MethodNotAllowed, NotFound

from portfolio.shared.config import load_config
from portfolio.shared.logging import logger

from .base import AppError

ROUTE_NOT_FOUND = "Route not found"


def handle_app_error(error: AppError) -> tuple[Response, HTTPStatus]:
    response = jsonify(error.to_dict())
    return response, error.status


def route_not_found() -> tuple[Response, HTTPStatus]:
    return jsonify({"success": False, "error": ROUTE_NOT_FOUND}), HTTPStatus.NOT_FOUND


def register_error_handler(
    app, *, default_status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR
) -> None:
    config = load_config()
    debug_mode = config.debug_logging

    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError):
        from flask import request

        logger.warning(f"Handled application error {exc.code} on {request.method} {request.path}")
        return handle_app_error(exc)

    # Unknown path and unknown method on a known path look the same to clients.
    @app.errorhandler(NotFound)
    @app.errorhandler(MethodNotAllowed)
    def _handle_unmatched(_exc: HTTPException):
        return route_not_found()

    @app.errorhandler(HTTPException)
    def _handle_http(exc: HTTPException):
        status = exc.code or default_status
        error = (exc.name or "http_error").lower().replace(" ", "_")
        return jsonify({"success": False, "error": error}), status

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        from flask import request

        ip_address = (
            request.headers.get("X-Forwarded-For", "").split(",")[0].strip()
            if request.headers.get("X-Forwarded-For")
            else (request.remote_addr or "unknown")
        )

        if debug_mode:
            logger.exception(
                f"Unhandled exception: {request.method} {request.path} "
                f"from {ip_address}, query={dict(request.args)}, body_size={len(request.data)}"
            )
        else:
            logger.error(f"Error: {type(exc).__name__} on {request.method} {request.path}")

        response = jsonify({"success": False, "error": "internal_error"})
        return response, default_status
