"""Formatter JSON dos logs do bootstrap.

Cada linha carrega o id da tentativa de bootstrap (`attempt_id`), então
todas as etapas de uma tentativa (perfil, views, publicação) podem ser
agrupadas mesmo quando uma tentativa nova começa antes da anterior
terminar.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any

from pythonjsonlogger.json import JsonFormatter

# Ordem das chaves no JSON; campos de `extra` vêm depois
REQUIRED_LOG_FIELDS: tuple[str, ...] = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

# correlation_id é o id da tentativa de bootstrap
FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
    "correlation_id": "attempt_id",
}


def _json_default(value: Any) -> Any:
    """Serializa tipos do domínio que aparecem em `extra`."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, MappingProxyType):
        return dict(value)
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    return str(value)


def create_json_formatter() -> JsonFormatter:
    """Cria o formatter dos logs do bootstrap.

    Exemplo de linha ao fim de uma tentativa:
        {"asctime": "2026-10-19 10:30:00,123", "level": "INFO",
         "logger": "app.coordinators.home.bootstrap",
         "message": "session_bootstrap_finished",
         "attempt_id": "9f0c2b...", "service": "home-feed-bootstrap",
         "status": "ready", "library_count": 4}
    """
    format_string = " ".join(f"%({name})s" for name in REQUIRED_LOG_FIELDS)

    return JsonFormatter(
        format_string,
        rename_fields=FIELD_RENAME_MAP,
        json_default=_json_default,
        json_ensure_ascii=False,
    )
