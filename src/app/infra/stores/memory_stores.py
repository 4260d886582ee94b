"""Stores em memória: desenvolvimento, testes e credenciais de sessão única.

ATENÇÃO: Sem persistência entre reinícios.
"""

from __future__ import annotations

from app.domain.account import (
    Account,
    ServerConnection,
    credential_key,
    pair_accounts_with_servers,
)
from app.protocols.account_registry import AccountRegistryProtocol
from app.protocols.credential_store import CredentialStoreProtocol


class MemoryAccountRegistry(AccountRegistryProtocol):
    """Registro de servidores/contas em memória."""

    def __init__(
        self,
        servers: list[ServerConnection] | None = None,
        accounts: list[Account] | None = None,
    ) -> None:
        self._servers: dict[str, ServerConnection] = {s.server_id: s for s in servers or []}
        self._accounts: dict[str, Account] = {a.account_id: a for a in accounts or []}

    def add_server(self, server: ServerConnection) -> None:
        self._servers[server.server_id] = server

    def add_account(self, account: Account) -> None:
        self._accounts[account.account_id] = account

    def list_configured(self) -> list[tuple[Account, ServerConnection]]:
        """Pares (conta, servidor) ordenados por nome do servidor e username."""
        return pair_accounts_with_servers(self._servers.values(), self._accounts.values())


class MemoryCredentialStore(CredentialStoreProtocol):
    """Store de tokens em memória, indexado por `credential_key`."""

    def __init__(self) -> None:
        self._store: dict[str, str] = {}

    def save(self, account_id: str, token: str) -> None:
        self._store[credential_key(account_id)] = token

    def lookup(self, account_id: str) -> str | None:
        return self._store.get(credential_key(account_id))

    def delete(self, account_id: str) -> bool:
        """Remove token; retorna False se não existia."""
        return self._store.pop(credential_key(account_id), None) is not None
