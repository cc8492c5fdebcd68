"""Application dependency container."""

from __future__ import annotations

from functools import cached_property

from portfolio.application.services.session_manager import SessionManager
from portfolio.domain.auth.repositories import KeyValueStorage
from portfolio.infrastructure.credential_store import LocalCredentialStore
from portfolio.infrastructure.storage import build_storage
from portfolio.interfaces.http.controllers.contact_controller import ContactController
from portfolio.interfaces.http.controllers.misc_controller import MiscController
from portfolio.shared.config import AppConfig, load_config


class Container:
    def __init__(self, config: AppConfig | None = None) -> None:
        self._config = config

    @cached_property
    def config(self) -> AppConfig:
        return self._config or load_config()

    @cached_property
    def storage(self) -> KeyValueStorage:
        return build_storage(self.config.storage.file)

    @cached_property
    def credential_store(self) -> LocalCredentialStore:
        return LocalCredentialStore(self.storage)

    @cached_property
    def session_manager(self) -> SessionManager:
        return SessionManager(
            storage=self.storage,
            credentials=self.credential_store,
            config=self.config.auth,
        )

    @cached_property
    def contact_controller(self) -> ContactController:
        return ContactController()

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController()
