"""Classificação das respostas do backend.

Sucesso é exatamente status 200 (não a faixa 2xx). Em falha, o corpo
bruto vai para o log de operação e nunca para o chamador externo.
"""

from __future__ import annotations

import logging

from api.connectors.telegram.errors import parse_telegram_error
from app.domain.relay import DispatchOutcome

logger = logging.getLogger(__name__)


def classify_response(
    status_code: int,
    body: str | None,
    *,
    operation: str,
) -> DispatchOutcome:
    """Converte (status, corpo) em DispatchOutcome, logando falhas.

    Args:
        status_code: Status HTTP do backend
        body: Corpo bruto da resposta
        operation: Método da Bot API (ex: "sendMessage")
    """
    if status_code == 200:
        logger.debug(
            "telegram_send_ok",
            extra={"operation": operation, "status_code": status_code},
        )
        return DispatchOutcome.ok(status_code)

    outcome = DispatchOutcome.failure(status_code, body)
    extra: dict[str, object] = {
        "operation": operation,
        "status_code": status_code,
        "response_body": outcome.backend_body_excerpt,
    }
    api_error = parse_telegram_error(body)
    if api_error is not None:
        extra["error_code"] = api_error.error_code
        extra["description"] = api_error.description
        if api_error.retry_after is not None:
            extra["retry_after"] = api_error.retry_after

    logger.error("telegram_send_failed", extra=extra)
    return outcome
