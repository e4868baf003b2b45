"""Endpoints de relay autenticado por canal.

Endpoints:
- POST /send: texto em JSON (bloqueante)
- POST /send-mp: texto em multipart (bloqueante)
- POST /send-file: arquivo em multipart; responde 200 assim que a
  validação passa, o envio ao backend segue em background

Respostas:
- 200 com corpo vazio em sucesso
- JSON `{status, code, debug}` em erro
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Request, Response, UploadFile

from api.routes.errors import error_response
from api.routes.relay.schemas import SendBody
from app.bootstrap.relay_factory import RelayContext
from app.domain.relay import FileRelay, MarkupMode, TextRelay
from utils.errors import ErrorCode, RelayError

logger = logging.getLogger(__name__)

router = APIRouter()


def get_relay_context(request: Request) -> RelayContext:
    """Contexto compartilhado criado no startup (app.state.relay)."""
    context = getattr(request.app.state, "relay", None)
    if context is None:
        raise RelayError.server_error("relay not initialized")
    return context


RelayContextDep = Annotated[RelayContext, Depends(get_relay_context)]


@router.post("/send", response_model=None)
async def send(body: SendBody, context: RelayContextDep) -> Response:
    """Relay de texto (JSON)."""
    relay = TextRelay(
        channel=body.channel,
        secret=body.pass_,
        text=body.text,
        markup_mode=body.parse_mode,
    )
    try:
        await context.use_case.relay_text(relay)
    except RelayError as exc:
        return error_response(exc)
    return Response(status_code=200)


@router.post("/send-mp", response_model=None)
async def send_multipart(
    context: RelayContextDep,
    channel: Annotated[str, Form()],
    pass_: Annotated[str, Form(alias="pass")],
    text: Annotated[str, Form()],
    parse_mode: Annotated[MarkupMode | None, Form()] = None,
) -> Response:
    """Relay de texto (multipart, sem arquivo)."""
    relay = TextRelay(channel=channel, secret=pass_, text=text, markup_mode=parse_mode)
    try:
        await context.use_case.relay_text(relay)
    except RelayError as exc:
        return error_response(exc)
    return Response(status_code=200)


@router.post("/send-file", response_model=None)
async def send_file(
    context: RelayContextDep,
    file: Annotated[UploadFile, File()],
    channel: Annotated[str, Form()],
    pass_: Annotated[str, Form(alias="pass")],
    text: Annotated[str | None, Form()] = None,
    caption: Annotated[str | None, Form()] = None,
    parse_mode: Annotated[MarkupMode | None, Form()] = None,
) -> Response:
    """Relay de arquivo com legenda (`text` ou `caption`, um dos dois obrigatório)."""
    caption_text = text if text is not None else caption
    if caption_text is None:
        return error_response(RelayError(ErrorCode.BAD_REQUEST, "invalid request: body.text"))

    size = _upload_size(file)
    logger.info(
        "relay_file_received",
        extra={"channel": channel, "size": size, "content_type": file.content_type},
    )
    # Acima do teto o conteúdo nem é carregado: o use case rejeita pelo tamanho
    if size < context.relay_settings.max_file_size_bytes:
        content = await file.read()
    else:
        content = b""

    relay = FileRelay(
        channel=channel,
        secret=pass_,
        caption=caption_text,
        file_bytes=content,
        size=size,
        file_name=file.filename or None,
        mime_type=file.content_type or None,
        markup_mode=parse_mode,
    )
    try:
        await context.use_case.relay_file(relay)
    except RelayError as exc:
        return error_response(exc)
    return Response(status_code=200)


def _upload_size(file: UploadFile) -> int:
    if file.size is not None:
        return file.size
    stream = file.file
    position = stream.tell()
    stream.seek(0, 2)
    size = stream.tell()
    stream.seek(position)
    return size
