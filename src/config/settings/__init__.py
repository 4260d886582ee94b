"""Agregador de settings do cliente.

Re-exporta todas as settings e funções de cada módulo.
"""

from __future__ import annotations

from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)
from config.settings.media_server import (
    DEFAULT_CLIENT_NAME,
    DEFAULT_CLIENT_VERSION,
    CredentialStoreBackend,
    MediaServerSettings,
    get_media_server_settings,
)

__all__ = [
    "DEFAULT_CLIENT_NAME",
    "DEFAULT_CLIENT_VERSION",
    "BaseSettings",
    "CredentialStoreBackend",
    "Environment",
    "MediaServerSettings",
    "get_base_settings",
    "get_media_server_settings",
]
