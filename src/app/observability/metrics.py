"""Registro de métricas via structured logging.

Métricas suportadas:
- Latência: tempo de cada requisição do bootstrap
- Outcome: status terminal de cada tentativa

Uso:
    from app.observability import record_latency, record_bootstrap_outcome

    start = time.perf_counter()
    # ... requisição ...
    record_latency("profile_request", (time.perf_counter() - start) * 1000, ok=True)
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(operation: str, latency_ms: float, *, ok: bool) -> None:
    """Registra latência de uma requisição.

    Args:
        operation: Nome da operação (ex: "profile_request", "views_request")
        latency_ms: Latência em milissegundos
        ok: Se a requisição terminou com sucesso
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": "session_bootstrap",
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "ok": ok,
        },
    )


def record_bootstrap_outcome(status: str, elapsed_ms: float) -> None:
    """Registra counter de status terminal do bootstrap."""
    logger.info(
        "metric_bootstrap_outcome",
        extra={
            "metric_type": "counter",
            "component": "session_bootstrap",
            "status": status,
            "elapsed_ms": round(elapsed_ms, 2),
        },
    )
