# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from flask import Flask
from flask_cors import CORS

from portfolio.container import Container
from portfolio.shared.config import AppConfig, load_config
from portfolio.shared.logging import logger, setup_logging
from portfolio.shared.middleware.error_handler import configure_error_handling
from portfolio.shared.middleware.request_logger import configure_request_logging


def create_app(config: AppConfig | None = None, *, container: Container | None = None) -> Flask:
    config = config or load_config()
    container = container or Container(config)

    app = Flask(__name__)
    configure_error_handling(app)
    configure_request_logging(app)

    CORS(app, origins=config.server.allowed_origins)
    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.contact_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        return resp

    logger.info("Flask app initialized")
    return app


def run_server(host: str | None = None, port: int | None = None) -> None:
    config = load_config()
    setup_logging(debug_mode=config.debug_logging)
    host = host or config.server.host
    port = port or config.server.port
    app = create_app(config)
    logger.info(f"Server running on http://localhost:{port}")
    logger.info("Waiting for contact form messages...")
    app.run(host=host, port=port, debug=config.debug_logging)


if __name__ == "__main__":
    run_server()
