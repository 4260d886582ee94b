"""Observabilidade: correlação de logs e métricas do bootstrap.

Uso:
    from app.observability import bootstrap_attempt, get_correlation_id
    from app.observability import record_latency, record_bootstrap_outcome
"""

from app.observability.correlation import (
    bootstrap_attempt,
    generate_correlation_id,
    get_correlation_id,
)
from app.observability.metrics import (
    record_bootstrap_outcome,
    record_latency,
)

__all__ = [
    "bootstrap_attempt",
    "generate_correlation_id",
    "get_correlation_id",
    "record_bootstrap_outcome",
    "record_latency",
]
