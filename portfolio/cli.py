# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Command line front-end: one storage file plays one browser profile."""

from __future__ import annotations

import argparse
import getpass
import threading
from collections.abc import Sequence
from pathlib import Path

from portfolio.container import Container
from portfolio.domain.auth.entities import SessionEvent
from portfolio.interfaces.view.auth_view import AuthView
from portfolio.shared.config import AppConfig, load_config
from portfolio.shared.logging import setup_logging


def _ask_password(value: str | None, prompt: str) -> str:
    if value is not None:
        return value
    return getpass.getpass(prompt)


def _confirm(prompt: str) -> bool:
    return input(f"{prompt} [y/N] ").strip().lower() in ("y", "yes")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="portfolio-gate", description="Portfolio sign-in gate and contact backend"
    )
    parser.add_argument(
        "--storage",
        type=Path,
        default=None,
        help="Profile storage file (defaults to STORAGE_FILE)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    reg = sub.add_parser("register", help="Create an account and sign in")
    reg.add_argument("email")
    reg.add_argument("--password")
    reg.add_argument("--confirm")

    login = sub.add_parser("login", help="Sign in")
    login.add_argument("email")
    login.add_argument("--password")

    logout = sub.add_parser("logout", help="Sign out")
    logout.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")

    sub.add_parser("whoami", help="Print the signed-in email")
    sub.add_parser("watch", help="Keep the session open until it expires")

    serve = sub.add_parser("serve", help="Run the contact form backend")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    return parser


def _load_config(storage: Path | None) -> AppConfig:
    config = load_config()
    if storage is not None:
        config = config.model_copy(
            update={"storage": config.storage.model_copy(update={"file": storage})}
        )
    return config


def _watch(container: Container, view: AuthView) -> int:
    sessions = container.session_manager
    if sessions.current_user() is None:
        view.render()
        return 1

    ended = threading.Event()

    def _on_change(event: SessionEvent, _user: str | None) -> None:
        if event in (SessionEvent.EXPIRED, SessionEvent.LOGGED_OUT):
            ended.set()

    view.subscribe(_on_change)
    monitor = sessions.start_monitoring()
    try:
        ended.wait()
    except KeyboardInterrupt:
        pass
    finally:
        monitor.stop()
    return 0


def main(argv: Sequence[str] | None = None, *, container: Container | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "serve":
        from portfolio.app import run_server

        run_server(args.host, args.port)
        return 0

    if container is None:
        config = _load_config(args.storage)
        setup_logging(debug_mode=config.debug_logging)
        container = Container(config)
    view = AuthView(container.session_manager)

    if args.command == "register":
        password = _ask_password(args.password, "Password: ")
        confirm = _ask_password(args.confirm, "Confirm password: ")
        return 0 if view.submit_register(args.email, password, confirm) else 1
    if args.command == "login":
        password = _ask_password(args.password, "Password: ")
        return 0 if view.submit_login(args.email, password) else 1
    if args.command == "logout":
        confirm = (lambda _prompt: True) if args.yes else _confirm
        view.request_logout(confirm)
        return 0
    if args.command == "whoami":
        user = container.session_manager.current_user()
        print(user or "Not logged in")
        return 0 if user else 1
    if args.command == "watch":
        return _watch(container, view)
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
