"""Modelos de domínio de servidores e contas configurados.

Registros criados por um fluxo de login anterior (externo). Aqui são
apenas lidos para escolher o servidor e a credencial do bootstrap.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

# Prefixo da chave de armazenamento seguro por conta
CREDENTIAL_KEY_PREFIX = "AccessToken_"


@dataclass(frozen=True, slots=True)
class ServerConnection:
    """Servidor de mídia configurado.

    Attributes:
        server_id: Identidade opaca usada para parear contas
        name: Nome amigável (define a ordem no registro)
        base_address: URI base do servidor (ex: https://media.local:8096)
    """

    server_id: str
    name: str
    base_address: str

    def url_for(self, path: str) -> str:
        """Monta URL absoluta para um path da API."""
        return self.base_address.rstrip("/") + "/" + path.lstrip("/")


@dataclass(frozen=True, slots=True)
class Account:
    """Usuário previamente autenticado em um servidor específico.

    Attributes:
        account_id: Identidade estável do usuário no servidor
        username: Nome de login (define a ordem no registro)
        display_name: Nome de exibição
        device_identifier: DeviceId registrado no login
        server_id: Servidor contra o qual a conta foi criada
    """

    account_id: str
    username: str
    display_name: str = ""
    device_identifier: str = ""
    server_id: str = ""


def credential_key(account_id: str) -> str:
    """Chave do armazenamento seguro para o token da conta.

    Uma chave por conta: contas distintas nunca colidem.
    """
    return f"{CREDENTIAL_KEY_PREFIX}{account_id}"


def pair_accounts_with_servers(
    servers: Iterable[ServerConnection],
    accounts: Iterable[Account],
) -> list[tuple[Account, ServerConnection]]:
    """Pareia contas com o servidor em que foram criadas.

    Ordem determinística: nome do servidor, depois username. Contas
    cujo servidor não está configurado ficam de fora.
    """
    by_id = {server.server_id: server for server in servers}
    pairs = [
        (account, by_id[account.server_id])
        for account in accounts
        if account.server_id in by_id
    ]
    pairs.sort(key=lambda pair: (pair[1].name, pair[0].username))
    return pairs


__all__ = [
    "CREDENTIAL_KEY_PREFIX",
    "Account",
    "ServerConnection",
    "credential_key",
    "pair_accounts_with_servers",
]
