"""Registro de servidores/contas lido de arquivo YAML.

Formato esperado:

    servers:
      - id: srv-1
        name: Casa
        base_address: https://media.local:8096
    accounts:
      - id: 5f1c...
        username: alice
        display_name: Alice
        device_id: 0d9e...
        server_id: srv-1

Arquivo inexistente equivale a nenhum servidor configurado.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from app.domain.account import Account, ServerConnection, pair_accounts_with_servers
from app.protocols.account_registry import AccountRegistryProtocol
from utils.errors import RegistryError

logger = logging.getLogger(__name__)


class YamlAccountRegistry(AccountRegistryProtocol):
    """Lê o arquivo a cada consulta para refletir logins feitos por fora."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def list_configured(self) -> list[tuple[Account, ServerConnection]]:
        data = self._load()
        servers = [_parse_server(item) for item in _entries(data, "servers")]
        accounts = [_parse_account(item) for item in _entries(data, "accounts")]
        return pair_accounts_with_servers(servers, accounts)

    def _load(self) -> dict[str, Any]:
        if not self._path.exists():
            logger.debug("registry_file_missing", extra={"path": str(self._path)})
            return {}
        try:
            with self._path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as exc:
            raise RegistryError(f"Registro ilegível: {self._path}") from exc

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise RegistryError(f"Registro deve ser um mapeamento: {self._path}")
        return data


def _entries(data: dict[str, Any], key: str) -> list[dict[str, Any]]:
    value = data.get(key) or []
    if not isinstance(value, list) or not all(isinstance(item, dict) for item in value):
        raise RegistryError(f"'{key}' deve ser uma lista de mapeamentos")
    return value


def _require(item: dict[str, Any], key: str) -> str:
    value = item.get(key)
    if not value:
        raise RegistryError(f"Campo obrigatório ausente no registro: {key}")
    return str(value)


def _parse_server(item: dict[str, Any]) -> ServerConnection:
    return ServerConnection(
        server_id=_require(item, "id"),
        name=str(item.get("name", "")),
        base_address=_require(item, "base_address"),
    )


def _parse_account(item: dict[str, Any]) -> Account:
    return Account(
        account_id=_require(item, "id"),
        username=str(item.get("username", "")),
        display_name=str(item.get("display_name", "")),
        device_identifier=str(item.get("device_id", "")),
        server_id=_require(item, "server_id"),
    )
