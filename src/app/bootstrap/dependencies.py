"""Factories: criação das implementações concretas a partir das settings."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.coordinators.home import SessionBootstrapCoordinator
from app.infra.http import HttpClient, HttpClientConfig
from app.infra.stores import (
    EncryptedFileCredentialStore,
    MemoryCredentialStore,
    YamlAccountRegistry,
)
from app.services.authorization import ClientIdentity
from config.settings import get_media_server_settings

if TYPE_CHECKING:
    from app.protocols.account_registry import AccountRegistryProtocol
    from app.protocols.credential_store import CredentialStoreProtocol
    from app.protocols.http_client import HttpClientProtocol
    from app.sessions.home_feed_publisher import HomeFeedPublisher
    from config.settings import MediaServerSettings

logger = logging.getLogger(__name__)


def create_account_registry(settings: MediaServerSettings | None = None) -> AccountRegistryProtocol:
    """Cria registro de servidores/contas a partir do YAML configurado."""
    media = settings or get_media_server_settings()
    return YamlAccountRegistry(media.registry_path)


def create_credential_store(settings: MediaServerSettings | None = None) -> CredentialStoreProtocol:
    """Cria store de credenciais baseado na configuração.

    Lê CREDENTIAL_STORE_BACKEND:
    - "memory": MemoryCredentialStore (sem persistência)
    - "file": EncryptedFileCredentialStore (AES-GCM)
    """
    media = settings or get_media_server_settings()
    if media.credential_store_backend == "file":
        logger.info("credential_store_selected", extra={"backend": "file"})
        return EncryptedFileCredentialStore(
            media.credential_store_path,
            media.credential_store_key,
        )
    logger.info("credential_store_selected", extra={"backend": "memory"})
    return MemoryCredentialStore()


def create_http_client(settings: MediaServerSettings | None = None) -> HttpClientProtocol:
    media = settings or get_media_server_settings()
    return HttpClient(
        HttpClientConfig(
            timeout_seconds=media.request_timeout_seconds,
            max_retries=media.max_retries,
        )
    )


def create_client_identity(settings: MediaServerSettings | None = None) -> ClientIdentity:
    media = settings or get_media_server_settings()
    return ClientIdentity(
        client_name=media.client_name,
        client_version=media.client_version,
        device_name=media.device_name,
    )


def create_coordinator(
    settings: MediaServerSettings | None = None,
    publisher: HomeFeedPublisher | None = None,
) -> SessionBootstrapCoordinator:
    """Conecta registro, credenciais e cliente HTTP ao coordenador."""
    media = settings or get_media_server_settings()
    return SessionBootstrapCoordinator(
        registry=create_account_registry(media),
        credentials=create_credential_store(media),
        http_client=create_http_client(media),
        identity=create_client_identity(media),
        publisher=publisher,
    )
