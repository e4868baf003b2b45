"""Observabilidade: correlation_id e métricas via logs estruturados.

Uso:
    from app.observability import get_correlation_id, set_correlation_id
    from app.observability import record_dispatch_latency, record_relay_result
"""

from app.observability.correlation import (
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from app.observability.metrics import (
    record_dispatch_latency,
    record_relay_result,
)

__all__ = [
    "generate_correlation_id",
    "get_correlation_id",
    "record_dispatch_latency",
    "record_relay_result",
    "reset_correlation_id",
    "set_correlation_id",
]
