"""Testes do composition root."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

import pytest

from app.bootstrap import get_coordinator, validate_runtime_settings
from app.bootstrap.dependencies import (
    create_client_identity,
    create_coordinator,
    create_credential_store,
    create_http_client,
)
from app.infra.http import HttpClient
from app.infra.stores import (
    EncryptedFileCredentialStore,
    MemoryCredentialStore,
    generate_key,
)
from app.sessions.home_feed_publisher import HomeFeedPublisher
from config.settings import MediaServerSettings, get_base_settings, get_media_server_settings
from fsm import BootstrapStatus

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture(autouse=True)
def _clear_caches() -> Iterator[None]:
    get_base_settings.cache_clear()
    get_media_server_settings.cache_clear()
    get_coordinator.cache_clear()
    yield
    get_base_settings.cache_clear()
    get_media_server_settings.cache_clear()
    get_coordinator.cache_clear()


class TestFactories:
    """Testes das factories de adapters."""

    def test_memory_credential_store(self) -> None:
        """Backend padrão é em memória."""
        assert isinstance(create_credential_store(MediaServerSettings()), MemoryCredentialStore)

    def test_file_credential_store(self, tmp_path: Path) -> None:
        """Backend file cria store criptografado."""
        settings = MediaServerSettings(
            credential_store_backend="file",
            credential_store_path=str(tmp_path / "creds.json"),
            credential_store_key=generate_key(),
        )
        assert isinstance(create_credential_store(settings), EncryptedFileCredentialStore)

    def test_client_identity_from_settings(self) -> None:
        """Identidade do cliente vem das settings."""
        identity = create_client_identity(MediaServerSettings(device_name="tv"))
        assert identity.client_name == "SwiftFin"
        assert identity.client_version == "0.0.1"
        assert identity.device_name == "tv"

    def test_http_client(self) -> None:
        """Cliente HTTP concreto."""
        assert isinstance(create_http_client(MediaServerSettings()), HttpClient)


class TestCreateCoordinator:
    """Testes do wiring completo."""

    @pytest.mark.asyncio
    async def test_missing_registry_file_needs_server_selection(self, tmp_path: Path) -> None:
        """Sem arquivo de registro, bootstrap pede seleção de servidor."""
        publisher = HomeFeedPublisher()
        settings = MediaServerSettings(registry_path=str(tmp_path / "servers.yaml"))

        coordinator = create_coordinator(settings, publisher=publisher)
        state = await coordinator.bootstrap()

        assert state.status == BootstrapStatus.NEEDS_SERVER_SELECTION
        assert coordinator.publisher is publisher
        assert publisher.state is state

    def test_get_coordinator_is_singleton(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Mesma instância entre chamadas."""
        monkeypatch.setenv("CREDENTIAL_STORE_BACKEND", "memory")
        assert get_coordinator() is get_coordinator()


class TestValidateRuntimeSettings:
    """Testes da validação no startup."""

    def test_production_fails_fast(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Configuração inválida em production levanta RuntimeError."""
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("CREDENTIAL_STORE_BACKEND", "memory")

        with pytest.raises(RuntimeError, match="production"):
            validate_runtime_settings()

    def test_development_only_warns(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Em development, erro não bloqueia."""
        monkeypatch.setenv("ENVIRONMENT", "development")
        monkeypatch.setenv("MEDIA_MAX_RETRIES", "-1")

        validate_runtime_settings()
