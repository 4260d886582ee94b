"""Settings do cliente do servidor de mídia.

Identidade do cliente enviada no header de autorização, parâmetros do
cliente HTTP e backends do registro/credenciais.
"""

from __future__ import annotations

import os
import platform
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from config.settings.base.core import BaseSettings

CredentialStoreBackend = Literal["memory", "file"]

DEFAULT_CLIENT_NAME = "SwiftFin"
DEFAULT_CLIENT_VERSION = "0.0.1"


@dataclass(frozen=True)
class MediaServerSettings:
    """Configurações do cliente MediaBrowser.

    Attributes:
        client_name: Campo Client do header de autorização
        client_version: Campo Version do header de autorização
        device_name: Campo Device do header de autorização
        request_timeout_seconds: Timeout de cada requisição
        max_retries: Retries de transporte (429/5xx/conexão) por requisição; 0 = tentativa única
        registry_path: Arquivo YAML com servidores/contas configurados
        credential_store_backend: Backend de tokens (memory|file)
        credential_store_path: Arquivo do backend `file`
        credential_store_key: Chave AES-256 (base64) do backend `file`
    """

    client_name: str = DEFAULT_CLIENT_NAME
    client_version: str = DEFAULT_CLIENT_VERSION
    device_name: str = ""
    request_timeout_seconds: float = 15.0
    max_retries: int = 0
    registry_path: str = "servers.yaml"
    credential_store_backend: CredentialStoreBackend = "memory"
    credential_store_path: str = "credentials.json"
    credential_store_key: str = ""

    def validate(self, base: BaseSettings) -> list[str]:
        """Valida configurações do cliente.

        Args:
            base: BaseSettings para verificar ambiente.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if not self.client_name:
            errors.append("MEDIA_CLIENT_NAME não pode ser vazio")

        if not self.client_version:
            errors.append("MEDIA_CLIENT_VERSION não pode ser vazio")

        if self.request_timeout_seconds <= 0:
            errors.append("MEDIA_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.max_retries < 0:
            errors.append("MEDIA_MAX_RETRIES deve ser >= 0")

        if self.credential_store_backend not in ("memory", "file"):
            errors.append(f"CREDENTIAL_STORE_BACKEND inválido: {self.credential_store_backend}")

        if self.credential_store_backend == "file" and not self.credential_store_key:
            errors.append("CREDENTIAL_STORE_KEY obrigatório com CREDENTIAL_STORE_BACKEND=file")

        if self.credential_store_backend == "memory" and base.is_production:
            errors.append("CREDENTIAL_STORE_BACKEND=memory proibido em production")

        return errors


def _load_media_server_from_env() -> MediaServerSettings:
    """Carrega MediaServerSettings de variáveis de ambiente."""
    backend_str = os.getenv("CREDENTIAL_STORE_BACKEND", "memory").lower()
    backend: CredentialStoreBackend = "file" if backend_str == "file" else "memory"
    return MediaServerSettings(
        client_name=os.getenv("MEDIA_CLIENT_NAME", DEFAULT_CLIENT_NAME),
        client_version=os.getenv("MEDIA_CLIENT_VERSION", DEFAULT_CLIENT_VERSION),
        device_name=os.getenv("MEDIA_DEVICE_NAME", platform.node() or "unknown"),
        request_timeout_seconds=float(os.getenv("MEDIA_REQUEST_TIMEOUT_SECONDS", "15")),
        max_retries=int(os.getenv("MEDIA_MAX_RETRIES", "0")),
        registry_path=os.getenv("MEDIA_REGISTRY_PATH", "servers.yaml"),
        credential_store_backend=backend,
        credential_store_path=os.getenv("CREDENTIAL_STORE_PATH", "credentials.json"),
        credential_store_key=os.getenv("CREDENTIAL_STORE_KEY", ""),
    )


@lru_cache(maxsize=1)
def get_media_server_settings() -> MediaServerSettings:
    """Retorna instância cacheada de MediaServerSettings."""
    return _load_media_server_from_env()
