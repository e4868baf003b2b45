"""Middlewares HTTP: correlation_id com log de acesso e teto de upload."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from fastapi import HTTPException
from starlette.datastructures import Headers
from starlette.middleware.base import BaseHTTPMiddleware

from api.payload_builders.telegram import file_too_big_error
from api.routes.errors import error_response
from app.observability import get_correlation_id, reset_correlation_id, set_correlation_id
from app.observability.correlation import CORRELATION_HEADER

if TYPE_CHECKING:
    from collections.abc import Sequence

    from starlette.middleware.base import RequestResponseEndpoint
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)

# Rotas sem log de acesso (probes e documentação)
_QUIET_PREFIXES = ("/health", "/ready", "/docs", "/openapi", "/redoc")


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Adota/gera o correlation_id e o devolve no header da resposta."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        token = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        started_at = time.perf_counter()
        try:
            response = await call_next(request)
            response.headers[CORRELATION_HEADER] = get_correlation_id()
            path = request.url.path
            if not path.startswith(_QUIET_PREFIXES):
                logger.info(
                    "http_request",
                    extra={
                        "method": request.method,
                        "path": path,
                        "status_code": response.status_code,
                        "duration_ms": round((time.perf_counter() - started_at) * 1000, 2),
                    },
                )
            return response
        finally:
            reset_correlation_id(token)


# Folga sobre o teto do arquivo para os demais campos e delimitadores do multipart
MULTIPART_OVERHEAD_BYTES = 1_000_000
UPLOAD_PATHS = ("/send-file",)


class UploadLimitMiddleware:
    """Limita o corpo de uploads antes do parsing do multipart.

    O FastAPI lê o formulário inteiro antes de resolver dependências e
    chamar o handler, então o teto do corpo precisa ser aplicado aqui.
    Content-Length acima do limite é rejeitado sem ler o corpo; corpos
    sem Content-Length (chunked) são contados conforme chegam e o
    parsing é interrompido com 413, que o handler de erros converte
    em `file_too_big`.
    """

    def __init__(self, app: ASGIApp, *, paths: Sequence[str] = UPLOAD_PATHS) -> None:
        self.app = app
        self._paths = frozenset(paths)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope["path"] not in self._paths:
            await self.app(scope, receive, send)
            return

        context = getattr(scope["app"].state, "relay", None)
        if context is None:
            await self.app(scope, receive, send)
            return

        max_file_size = context.relay_settings.max_file_size_bytes
        max_body = max_file_size + MULTIPART_OVERHEAD_BYTES

        declared = Headers(scope=scope).get("content-length")
        if declared is not None and declared.isdigit() and int(declared) > max_body:
            logger.warning(
                "relay_upload_rejected",
                extra={"content_length": int(declared), "max_body_bytes": max_body},
            )
            response = error_response(file_too_big_error(max_file_size))
            await response(scope, receive, send)
            return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > max_body:
                    logger.warning(
                        "relay_upload_rejected",
                        extra={"received_bytes": received, "max_body_bytes": max_body},
                    )
                    raise HTTPException(
                        status_code=413,
                        detail=file_too_big_error(max_file_size).debug,
                    )
            return message

        await self.app(scope, limited_receive, send)
