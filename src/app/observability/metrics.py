"""Registro de métricas via structured logging.

Métricas do relay, emitidas como logs estruturados para agregação
posterior (ex: consultas sobre os logs JSON).

Métricas suportadas:
- Latência: tempo da chamada ao backend por operação
- Resultado: contador de relays por canal, tipo e resultado

Uso:
    from app.observability import record_dispatch_latency, record_relay_result

    start = time.perf_counter()
    # ... chamada ao backend ...
    record_dispatch_latency("sendMessage", (time.perf_counter() - start) * 1000, 200)

    record_relay_result("ops", "text", "sent")
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_dispatch_latency(
    operation: str,
    latency_ms: float,
    status_code: int | None = None,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de uma chamada ao backend.

    Args:
        operation: Método do backend (ex: "sendMessage", "sendDocument")
        latency_ms: Latência em milissegundos
        status_code: Status HTTP retornado (None em falha de rede)
        correlation_id: ID de correlação para rastreamento
    """
    extra: dict[str, object] = {
        "metric_type": "latency",
        "component": "telegram",
        "operation": operation,
        "latency_ms": round(latency_ms, 2),
        "status_code": status_code,
    }
    if correlation_id:
        extra["correlation_id"] = correlation_id
    logger.info("metric_dispatch_latency", extra=extra)


def record_relay_result(
    channel: str,
    kind: str,
    result: str,
) -> None:
    """Registra resultado de um relay.

    Args:
        channel: Nome do canal (nunca o secret)
        kind: "text" ou "file"
        result: "sent", "scheduled", "rejected" ou "failed"
    """
    logger.info(
        "metric_relay_result",
        extra={
            "metric_type": "counter",
            "component": "relay",
            "channel": channel,
            "kind": kind,
            "result": result,
        },
    )
