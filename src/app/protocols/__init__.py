"""Protocolos e contratos dos colaboradores do bootstrap."""

from .account_registry import AccountRegistryProtocol
from .credential_store import CredentialStoreProtocol
from .home_feed_observer import HomeFeedObserverProtocol
from .http_client import JSON_MEDIA_TYPE, HttpClientProtocol

__all__ = [
    "JSON_MEDIA_TYPE",
    "AccountRegistryProtocol",
    "CredentialStoreProtocol",
    "HomeFeedObserverProtocol",
    "HttpClientProtocol",
]
