"""Entrypoint da aplicação iris-relay.

Este módulo é o ponto de entrada principal do serviço.
Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    iris-relay -c /etc/iris/config.yaml --host 0.0.0.0 --port 7023

Uso (socket unix):
    iris-relay -c config.yaml --uds /run/iris/relay.sock

Uso (uvicorn direto):
    RELAY_CONFIG_PATH=config.yaml uvicorn app.app:app --port 7023
"""

from __future__ import annotations

import argparse
import os
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from api.middleware import CorrelationIdMiddleware, UploadLimitMiddleware
from api.routes import create_api_router
from api.routes.errors import register_error_handlers
from app.bootstrap import initialize_app, validate_runtime_settings
from app.bootstrap.relay_factory import create_relay_context
from config.logging import get_logger
from config.settings import get_relay_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Sequence

    from app.bootstrap.relay_factory import RelayContext

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Startup:
    - Carrega arquivo de canais e cria o cliente HTTP compartilhado
    - Valida configurações

    Shutdown:
    - Aguarda envios em background (com timeout)
    - Fecha o cliente HTTP
    """
    logger.info("app_starting", extra={"service": "iris-relay"})
    if getattr(app.state, "relay", None) is None:
        app.state.relay = create_relay_context()
    context: RelayContext = app.state.relay
    validate_runtime_settings(context)

    yield

    logger.info("app_shutting_down", extra={"service": "iris-relay"})
    await context.background.drain(timeout_seconds=context.relay_settings.shutdown_drain_seconds)
    await context.aclose()


def create_app(context: RelayContext | None = None) -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Args:
        context: Contexto já montado (testes). Se None, é criado no startup.

    Returns:
        Aplicação FastAPI configurada.
    """
    fastapi_app = FastAPI(
        title="iris-relay",
        description="Relay autenticado por canal para a Telegram Bot API",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url=None,
        openapi_url="/openapi.json",
    )
    fastapi_app.state.relay = context

    # Último adicionado é o mais externo: correlation_id envolve o teto de upload
    fastapi_app.add_middleware(UploadLimitMiddleware)
    fastapi_app.add_middleware(CorrelationIdMiddleware)
    register_error_handlers(fastapi_app)

    # Registra todas as rotas
    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"service": "iris-relay"})

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="iris-relay",
        description="Relay autenticado por canal para a Telegram Bot API",
    )
    parser.add_argument("-c", "--config", help="arquivo YAML de canais (RELAY_CONFIG_PATH)")
    parser.add_argument("--host", help="host de bind (RELAY_HOST)")
    parser.add_argument("--port", type=int, help="porta de bind (RELAY_PORT)")
    parser.add_argument("--uds", help="socket unix; substitui host/porta (RELAY_UDS)")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    """Entrypoint de linha de comando."""
    import uvicorn

    args = _parse_args(argv)
    if args.config:
        os.environ["RELAY_CONFIG_PATH"] = args.config
        get_relay_settings.cache_clear()

    settings = get_relay_settings()
    uds = args.uds or settings.uds
    host = args.host or settings.host
    port = args.port or settings.port

    logger.info(
        "relay_server_starting",
        extra={"host": None if uds else host, "port": None if uds else port, "uds": uds},
    )
    uvicorn.run(app, host=host, port=port, uds=uds, log_config=None)


if __name__ == "__main__":
    main()
