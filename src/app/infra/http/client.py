"""Cliente HTTP assíncrono para a API do servidor de mídia."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

import httpx

from app.protocols.http_client import JSON_MEDIA_TYPE, HttpClientProtocol

logger = logging.getLogger(__name__)


@dataclass
class HttpClientConfig:
    """Configuração do cliente HTTP."""

    timeout_seconds: float = 15.0
    max_retries: int = 0
    backoff_base_seconds: float = 0.5
    backoff_max_seconds: float = 8.0
    default_headers: dict[str, str] = field(default_factory=dict)
    verify_ssl: bool = True


class HttpError(Exception):
    """Erro de requisição HTTP sem dados sensíveis."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        is_retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.is_retryable = is_retryable


class HttpClient(HttpClientProtocol):
    """Envio de uma requisição, seguindo redirects do servidor.

    Por padrão faz uma única tentativa; com `max_retries` > 0 repete
    429/5xx e erros de conexão com backoff exponencial.

    Args:
        config: Configuração do cliente
        transport: Transport httpx opcional (ex: MockTransport em testes)
    """

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or HttpClientConfig()
        self._transport = transport

    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        accept: str = JSON_MEDIA_TYPE,
        content_type: str = JSON_MEDIA_TYPE,
    ) -> bytes:
        merged_headers = {
            **self._config.default_headers,
            "Accept": accept,
            "Content-Type": content_type,
            **(headers or {}),
        }
        for attempt in range(self._config.max_retries + 1):
            try:
                response = await self._request(method, url, merged_headers)
                _raise_for_status(response)
                return response.content
            except HttpError as exc:
                if not exc.is_retryable or attempt >= self._config.max_retries:
                    logger.warning(
                        "http_request_failed",
                        extra={"method": method, "path": _path(url), "status_code": exc.status_code},
                    )
                    raise
            except (httpx.TimeoutException, httpx.TransportError) as exc:
                if attempt >= self._config.max_retries:
                    logger.warning(
                        "http_connection_error",
                        extra={"method": method, "path": _path(url), "error_type": type(exc).__name__},
                    )
                    raise HttpError("http_connection_error", is_retryable=True) from exc
            except httpx.InvalidURL as exc:
                raise HttpError("http_invalid_url") from exc
            await _backoff_sleep(
                attempt,
                self._config.backoff_base_seconds,
                self._config.backoff_max_seconds,
            )
        raise HttpError("http_retry_exhausted", is_retryable=True)

    async def _request(self, method: str, url: str, headers: dict[str, str]) -> httpx.Response:
        async with httpx.AsyncClient(
            verify=self._config.verify_ssl,
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            return await client.request(
                method,
                url,
                headers=headers,
                timeout=self._config.timeout_seconds,
            )


def _raise_for_status(response: httpx.Response) -> None:
    status = response.status_code
    if status == 429 or status >= 500:
        raise HttpError("http_retryable_status", status_code=status, is_retryable=True)
    if not 200 <= status < 300:
        raise HttpError("http_status_error", status_code=status)


def _path(url: str) -> str:
    # Só o path vai para os logs; host pode identificar o usuário
    try:
        return httpx.URL(url).path
    except httpx.InvalidURL:
        return ""


async def _backoff_sleep(attempt: int, base: float, max_seconds: float) -> None:
    backoff = min((2**attempt) * base, max_seconds)
    logger.info("http_backoff", extra={"backoff_seconds": backoff})
    await asyncio.sleep(backoff)
