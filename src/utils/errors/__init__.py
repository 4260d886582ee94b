"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    CredentialStoreError,
    InfrastructureError,
    RegistryError,
)

__all__ = [
    "CredentialStoreError",
    "InfrastructureError",
    "RegistryError",
]
