"""Erros e helpers de parsing para a Telegram Bot API."""

from __future__ import annotations

import json
from dataclasses import dataclass


@dataclass(frozen=True)
class TelegramApiError:
    """Erro retornado pela Bot API (`{"ok": false, ...}`)."""

    error_code: int
    description: str
    retry_after: int | None = None


def parse_telegram_error(body: str | None) -> TelegramApiError | None:
    """Extrai o erro do corpo da resposta, quando ele é JSON da Bot API.

    Args:
        body: Corpo bruto da resposta

    Returns:
        TelegramApiError se o corpo descreve um erro, None caso contrário
    """
    if not body:
        return None
    try:
        data = json.loads(body)
    except json.JSONDecodeError:
        return None
    if not isinstance(data, dict) or data.get("ok") is not False:
        return None

    parameters = data.get("parameters")
    retry_after = parameters.get("retry_after") if isinstance(parameters, dict) else None

    return TelegramApiError(
        error_code=int(data.get("error_code", 0) or 0),
        description=str(data.get("description", "")),
        retry_after=retry_after if isinstance(retry_after, int) else None,
    )
