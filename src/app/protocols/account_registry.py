"""Contrato do registro de servidores/contas configurados."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from app.domain.account import Account, ServerConnection


@runtime_checkable
class AccountRegistryProtocol(Protocol):
    """Fonte dos pares (conta, servidor) criados por logins anteriores."""

    def list_configured(self) -> list[tuple[Account, ServerConnection]]:
        """Retorna pares em ordem determinística; lista vazia é válida."""
        ...
