"""Conversão de erros em respostas JSON `{status, code, debug}`.

Handlers de rota capturam RelayError e devolvem `error_response(exc)`.
`register_error_handlers` cobre o que escapa das rotas: corpo
malformado vira `bad_request`, HTTPException do framework (multipart
inválido, rota inexistente, upload acima do teto) ganha o mesmo
formato, e exceções inesperadas viram `server_error` sem detalhes
internos (a causa vai para o log).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from utils.errors import ErrorCode, RelayError

if TYPE_CHECKING:
    from fastapi import FastAPI, Request

logger = logging.getLogger(__name__)


def error_response(exc: RelayError) -> JSONResponse:
    """Resposta JSON do erro; status derivado do código."""
    return JSONResponse(status_code=exc.status, content=exc.as_dict())


def _validation_debug(exc: RequestValidationError) -> str:
    locations = sorted(
        {".".join(str(part) for part in error.get("loc", ())) for error in exc.errors()}
    )
    return f"invalid request: {', '.join(locations)}" if locations else "invalid request"


def _http_error_code(status_code: int) -> ErrorCode:
    if status_code == 404:
        return ErrorCode.NOT_FOUND
    if status_code == 413:
        return ErrorCode.FILE_TOO_BIG
    if status_code >= 500:
        return ErrorCode.SERVER_ERROR
    return ErrorCode.BAD_REQUEST


def register_error_handlers(app: FastAPI) -> None:
    """Registra handlers de exceção na aplicação."""

    @app.exception_handler(RelayError)
    async def handle_relay_error(request: Request, exc: RelayError) -> JSONResponse:
        logger.warning(
            "relay_error",
            extra={"code": exc.code.value, "path": request.url.path},
        )
        return error_response(exc)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        code = _http_error_code(exc.status_code)
        debug = str(exc.detail) if exc.detail else None
        logger.warning(
            "http_exception",
            extra={"path": request.url.path, "status_code": exc.status_code, "code": code.value},
        )
        return error_response(RelayError(code, debug))

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        debug = _validation_debug(exc)
        logger.warning(
            "request_validation_failed",
            extra={"path": request.url.path, "debug": debug},
        )
        return error_response(RelayError(ErrorCode.BAD_REQUEST, debug))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "unhandled_exception",
            extra={"path": request.url.path, "error_type": type(exc).__name__},
        )
        return error_response(RelayError.server_error(type(exc).__name__))
