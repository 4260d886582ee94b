"""Identificador da tentativa de bootstrap para correlação de logs.

Cada chamada de bootstrap roda sob um id próprio, injetado nos logs
pelo CorrelationIdFilter. Usa ContextVar para isolar tentativas
concorrentes no mesmo event loop.
"""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

_attempt_id: ContextVar[str] = ContextVar("bootstrap_attempt_id", default="")


def get_correlation_id() -> str:
    """Retorna o id da tentativa atual ou string vazia fora de uma tentativa."""
    return _attempt_id.get()


def generate_correlation_id() -> str:
    return uuid.uuid4().hex


@contextmanager
def bootstrap_attempt(attempt_id: str | None = None) -> Iterator[str]:
    """Define o id da tentativa durante o bloco e restaura o anterior ao sair."""
    value = attempt_id or generate_correlation_id()
    token = _attempt_id.set(value)
    try:
        yield value
    finally:
        _attempt_id.reset(token)
