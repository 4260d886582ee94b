"""Filters de logging do bootstrap.

CorrelationIdFilter marca cada record com a tentativa de bootstrap em
andamento. SensitiveFieldFilter impede que o token de acesso chegue à
saída, seja como campo de `extra`, seja embutido no header
`X-Emby-Authorization` (`... Token="<token>"`) dentro de uma string.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

REDACTED = "[redacted]"
SENSITIVE_FIELDS = frozenset({"authorization", "auth_header", "token", "access_token"})

# Campo Token do header MediaBrowser
_HEADER_TOKEN_RE = re.compile(r'(Token=")[^"]*(")')


def mask_header_token(text: str) -> str:
    """Troca o valor de `Token="..."` por REDACTED."""
    return _HEADER_TOKEN_RE.sub(rf"\g<1>{REDACTED}\g<2>", text)


class CorrelationIdFilter(logging.Filter):
    """Marca o record com o id da tentativa de bootstrap e o serviço.

    Args:
        service_name: Nome do serviço (ex: "home-feed-bootstrap").
        correlation_id_getter: Retorna o id da tentativa atual
            (app.observability.get_correlation_id). Sem getter, string vazia.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        # Tentativa explícita via `extra` vence a do contexto
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        return True


class SensitiveFieldFilter(logging.Filter):
    """Mascara credenciais em `extra` e em mensagens já formatadas."""

    def filter(self, record: logging.LogRecord) -> bool:
        for name in SENSITIVE_FIELDS:
            if getattr(record, name, None):
                setattr(record, name, REDACTED)

        if record.args:
            record.msg = record.getMessage()
            record.args = None
        if isinstance(record.msg, str):
            record.msg = mask_header_token(record.msg)

        for name, value in list(vars(record).items()):
            if isinstance(value, str) and 'Token="' in value:
                setattr(record, name, mask_header_token(value))
        return True
