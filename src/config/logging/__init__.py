"""Logging estruturado do relay (python-json-logger).

Uso:
    from config.logging import configure_logging, get_logger

    configure_logging(level="INFO", service_name="iris_relay")

    logger = get_logger(__name__)
    logger.info("relay_text_sent", extra={"channel": "ops"})

Todo record carrega correlation_id e service; o token do bot,
quando registrado via register_log_secret, sai mascarado.
"""

from config.logging.config import configure_logging, get_logger, register_log_secret
from config.logging.filters import REDACTED, CorrelationIdFilter, SecretRedactionFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
    create_text_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REDACTED",
    "REQUIRED_LOG_FIELDS",
    "CorrelationIdFilter",
    "SecretRedactionFilter",
    "configure_logging",
    "create_json_formatter",
    "create_text_formatter",
    "get_logger",
    "register_log_secret",
]
