"""Header de autorização do esquema MediaBrowser (Jellyfin/Emby).

O servidor faz parse estrutural deste header: nomes dos campos, aspas
e ordem seguem o formato que ele espera.
"""

from __future__ import annotations

from dataclasses import dataclass

AUTHORIZATION_HEADER = "X-Emby-Authorization"
AUTHORIZATION_SCHEME = "MediaBrowser"


@dataclass(frozen=True, slots=True)
class ClientIdentity:
    """Identidade fixa do cliente enviada em toda requisição autenticada."""

    client_name: str
    client_version: str
    device_name: str


def build_authorization_header(
    identity: ClientIdentity,
    *,
    device_id: str,
    token: str,
) -> str:
    """Monta o valor do header de autorização.

    Args:
        identity: Nome/versão do cliente e nome do dispositivo
        device_id: DeviceId registrado para a conta
        token: Token de acesso (vazio quando não há credencial salva)

    Returns:
        Ex: MediaBrowser Client="SwiftFin", Device="ipad", DeviceId="d-1",
        Version="0.0.1", Token="abc"
    """
    fields = (
        ("Client", identity.client_name),
        ("Device", identity.device_name),
        ("DeviceId", device_id),
        ("Version", identity.client_version),
        ("Token", token),
    )
    rendered = ", ".join(f'{name}="{value}"' for name, value in fields)
    return f"{AUTHORIZATION_SCHEME} {rendered}"


def authorization_headers(authorization: str) -> dict[str, str]:
    """Headers HTTP para uma requisição autenticada."""
    return {AUTHORIZATION_HEADER: authorization}
