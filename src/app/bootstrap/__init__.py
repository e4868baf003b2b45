"""Bootstrap da aplicação: inicialização e wiring.

Este módulo é o composition root: configura logging, valida settings
e monta o contexto compartilhado do relay.

Uso:
    from app.bootstrap import initialize_app, validate_runtime_settings

    initialize_app()
    validate_runtime_settings(context)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import get_base_settings

if TYPE_CHECKING:
    from app.bootstrap.relay_factory import RelayContext

# Nome do serviço para logs e métricas
SERVICE_NAME = "iris_relay"

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Inicializa logging do serviço.

    Deve ser chamada uma vez no início do serviço. Em DEBUG os logs
    saem em texto em vez de JSON.
    """
    base = get_base_settings()
    configure_logging(
        level=base.log_level,
        service_name=SERVICE_NAME,
        correlation_id_getter=get_correlation_id,
        json_format=not base.debug,
    )


def initialize_test_app() -> None:
    """Inicializa a aplicação para testes (DEBUG, texto)."""
    configure_logging(
        level="DEBUG",
        service_name=f"{SERVICE_NAME}_test",
        correlation_id_getter=get_correlation_id,
        json_format=False,
    )


def validate_runtime_settings(context: RelayContext) -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` mantém alerta sem bloquear execução local.
    """
    base = get_base_settings()
    errors: list[str] = []
    errors.extend(f"base: {error}" for error in base.validate())
    errors.extend(f"relay: {error}" for error in context.relay_settings.validate())
    errors.extend(f"telegram: {error}" for error in context.telegram_settings.validate())
    if len(context.registry) == 0:
        errors.append("channels: nenhum canal configurado")

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": base.environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": base.environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if base.strict_validation:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {base.environment}:\n{details}")
