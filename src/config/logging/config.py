"""Configuração centralizada de logging.

Uso:
    from config.logging import configure_logging, get_logger, register_log_secret

    # Na inicialização do serviço (app/bootstrap/)
    configure_logging(level="INFO", service_name="iris_relay")
    register_log_secret(telegram_settings.bot_token)

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("relay_text_sent", extra={"channel": "ops"})
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import CorrelationIdFilter, SecretRedactionFilter
from config.logging.formatters import create_json_formatter, create_text_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

# Níveis de log válidos
VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

# Nome padrão do serviço
DEFAULT_SERVICE_NAME = "iris_relay"

# Loggers de bibliotecas que logam cada request (URL do backend contém o token)
_QUIET_LOGGERS = ("httpx", "httpcore")

# Compartilhado entre reconfigurações: segredos registrados continuam mascarados
_redaction_filter = SecretRedactionFilter()


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
    *,
    json_format: bool = True,
) -> None:
    """Configura o root logger com um único handler em stderr.

    Deve ser chamada uma vez na inicialização do serviço (app/bootstrap/).

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função opcional que retorna o correlation_id
            do contexto atual (ex: de ContextVar).
        json_format: True para JSON estruturado, False para texto.

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter() if json_format else create_text_formatter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))
    handler.addFilter(_redaction_filter)

    root = logging.getLogger()
    root.setLevel(level_upper)
    root.handlers = [handler]

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def register_log_secret(value: str) -> None:
    """Registra um valor que nunca deve aparecer nas mensagens de log."""
    _redaction_filter.add_secret(value)


def get_logger(name: str) -> logging.Logger:
    """Retorna logger para o módulo especificado."""
    return logging.getLogger(name)
