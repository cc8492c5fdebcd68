from __future__ import annotations

from pathlib import Path

import pytest

from portfolio.cli import build_parser, main
from portfolio.container import Container
from portfolio.shared.config import AppConfig, StorageConfig


def _container(profile: Path) -> Container:
    config = AppConfig().model_copy(update={"storage": StorageConfig(file=profile)})
    return Container(config)


@pytest.fixture()
def profile(tmp_path: Path) -> Path:
    return tmp_path / "profile.json"


def run(profile: Path, *argv: str) -> int:
    return main(list(argv), container=_container(profile))


def test_session_survives_between_invocations(profile: Path, capsys) -> None:
    assert run(profile, "register", "a@x.com", "--password", "pass1", "--confirm", "pass1") == 0
    assert run(profile, "whoami") == 0
    assert capsys.readouterr().out.strip().endswith("a@x.com")

    assert run(profile, "logout", "--yes") == 0
    assert run(profile, "whoami") == 1
    assert capsys.readouterr().out.strip().endswith("Not logged in")


def test_login_with_wrong_password_fails(profile: Path, capsys) -> None:
    run(profile, "register", "a@x.com", "--password", "pass1", "--confirm", "pass1")
    run(profile, "logout", "--yes")
    capsys.readouterr()

    assert run(profile, "login", "a@x.com", "--password", "wrong") == 1
    assert "Invalid email or password." in capsys.readouterr().out

    assert run(profile, "login", "a@x.com", "--password", "pass1") == 0


def test_logout_prompt_can_be_declined(profile: Path, monkeypatch) -> None:
    run(profile, "register", "a@x.com", "--password", "pass1", "--confirm", "pass1")
    monkeypatch.setattr("builtins.input", lambda _prompt: "n")

    assert run(profile, "logout") == 0
    assert run(profile, "whoami") == 0


def test_password_is_prompted_when_missing(profile: Path, monkeypatch) -> None:
    monkeypatch.setattr("portfolio.cli.getpass.getpass", lambda _prompt: "pass1")

    assert run(profile, "register", "a@x.com") == 0


def test_watch_requires_session(profile: Path) -> None:
    assert run(profile, "watch") == 1


def test_parser_requires_command() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args([])
