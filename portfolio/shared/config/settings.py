# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DAY_MS = 24 * 60 * 60 * 1000

_SECTION_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    extra="ignore",
    validate_by_name=True,
)


class AuthConfig(BaseSettings):
    session_duration_ms: int = Field(DAY_MS, ge=1, alias="SESSION_DURATION_MS")
    check_interval_ms: int = Field(60_000, ge=10, alias="SESSION_CHECK_INTERVAL_MS")
    min_password_length: int = Field(4, ge=1, alias="MIN_PASSWORD_LENGTH")

    model_config = _SECTION_CONFIG

    @property
    def check_interval_seconds(self) -> float:
        return self.check_interval_ms / 1000.0


class StorageConfig(BaseSettings):
    # One file per "browser profile"; None keeps everything in memory.
    file: Path | None = Field(Path("instance/local_storage.json"), alias="STORAGE_FILE")

    model_config = _SECTION_CONFIG

    @field_validator("file", mode="before")
    @classmethod
    def _parse_file(cls, value: str | Path | None) -> Path | None:
        if isinstance(value, str):
            value = value.strip()
            if value.lower() in ("", "memory", ":memory:"):
                return None
        return value


class ServerConfig(BaseSettings):
    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(3000, ge=1, le=65535, alias="PORT")
    allowed_origins: Annotated[list[str], NoDecode] = Field(["*"], alias="ALLOWED_ORIGINS")

    model_config = _SECTION_CONFIG

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value


def _auth_config_factory() -> AuthConfig:
    return AuthConfig()  # type: ignore[call-arg]


def _storage_config_factory() -> StorageConfig:
    return StorageConfig()  # type: ignore[call-arg]


def _server_config_factory() -> ServerConfig:
    return ServerConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")

    auth: AuthConfig = Field(default_factory=_auth_config_factory)
    storage: StorageConfig = Field(default_factory=_storage_config_factory)
    server: ServerConfig = Field(default_factory=_server_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_assignment=True,
        arbitrary_types_allowed=True,
    )

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        warnings = [
            "⚠️  Passwords are stored in plaintext (demo credential store)",
        ]
        if "*" in self.server.allowed_origins:
            warnings.append("⚠️  CORS allows wildcard (*) origins")

        print("\n⚠️  PRODUCTION SECURITY WARNINGS:", file=sys.stderr)
        for warning in warnings:
            print(f"   {warning}", file=sys.stderr)
        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()


__all__ = ["AppConfig", "AuthConfig", "ServerConfig", "StorageConfig", "load_config"]
