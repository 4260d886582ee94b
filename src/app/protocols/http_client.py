"""Protocolo HTTP usado pelo coordenador de bootstrap.

Evita dependência direta do httpx fora de app/infra.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

JSON_MEDIA_TYPE = "application/json"


@runtime_checkable
class HttpClientProtocol(Protocol):
    """Contrato mínimo de envio de uma requisição.

    Implementações devem levantar `HttpError` em falha de transporte ou
    status fora de 2xx e retornar o corpo bruto em caso de sucesso.
    """

    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        accept: str = JSON_MEDIA_TYPE,
        content_type: str = JSON_MEDIA_TYPE,
    ) -> bytes: ...
