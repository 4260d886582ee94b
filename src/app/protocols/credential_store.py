"""Contrato do armazenamento seguro de credenciais por conta."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class CredentialStoreProtocol(Protocol):
    """Tokens de acesso indexados pelo id da conta.

    Implementações gravam sob `credential_key(account_id)` para que
    contas diferentes nunca colidam.
    """

    def lookup(self, account_id: str) -> str | None:
        """Retorna o token salvo ou None se ausente."""
        ...
