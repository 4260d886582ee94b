"""Stores: implementações concretas do registro e das credenciais.

Módulos disponíveis:
    - memory_stores: Registro e credenciais em memória
    - yaml_account_registry: Registro de servidores/contas em YAML
    - encrypted_credential_store: Tokens em arquivo criptografado (AES-GCM)
"""

from __future__ import annotations

from app.infra.stores.encrypted_credential_store import (
    EncryptedFileCredentialStore,
    generate_key,
)
from app.infra.stores.memory_stores import (
    MemoryAccountRegistry,
    MemoryCredentialStore,
)
from app.infra.stores.yaml_account_registry import YamlAccountRegistry

__all__ = [
    "EncryptedFileCredentialStore",
    "MemoryAccountRegistry",
    "MemoryCredentialStore",
    "YamlAccountRegistry",
    "generate_key",
]
