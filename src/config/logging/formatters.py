"""Formatters de logging.

JSON (produção) com campos obrigatórios:
- correlation_id
- service
- timestamp (asctime)
- level
- logger (name)
- message

Texto (desenvolvimento/testes) com os mesmos campos em uma linha.
Campos passados via `extra` só aparecem no formato JSON.
"""

from __future__ import annotations

import logging

from pythonjsonlogger.json import JsonFormatter

# Campos obrigatórios em todo log estruturado
REQUIRED_LOG_FIELDS = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

# Mapeamento de nomes de campos para formato padrão
FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}

TEXT_LOG_FORMAT = (
    "%(asctime)s %(levelname)-8s [%(service)s] [%(correlation_id)s] %(name)s: %(message)s"
)


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com campos padronizados.

    Exemplo de output:
        {
            "asctime": "2026-10-19 10:30:00,123",
            "level": "ERROR",
            "logger": "api.connectors.telegram.responses",
            "message": "telegram_send_failed",
            "correlation_id": "abc-123",
            "service": "iris_relay",
            "status_code": 400
        }
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)

    return JsonFormatter(
        format_string,
        rename_fields=FIELD_RENAME_MAP,
    )


def create_text_formatter() -> logging.Formatter:
    """Cria formatter de texto legível para uso local."""
    return logging.Formatter(TEXT_LOG_FORMAT)
