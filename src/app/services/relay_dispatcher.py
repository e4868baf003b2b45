"""Despacho de payloads ao backend.

Dois modos, que não se misturam dentro de um mesmo tipo de relay:

- Bloqueante: o handler aguarda o backend; resposta != 200 vira
  `send_failed` para o chamador.
- Destacado (fire-and-forget): o chamador já recebeu 200; a chamada
  roda em background e falhas do backend são apenas logadas, nunca
  propagadas. Confirmação de entrega de arquivos é best-effort.
"""

from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING, Any

from utils.errors import ErrorCode, RelayError

if TYPE_CHECKING:
    from app.protocols import DocumentPayload, TelegramClientProtocol
    from app.services.background_sends import BackgroundSender

logger = logging.getLogger(__name__)


class RelayDispatcher:
    """Envia payloads construídos usando o cliente HTTP compartilhado."""

    def __init__(self, client: TelegramClientProtocol, background: BackgroundSender) -> None:
        self._client = client
        self._background = background

    async def send_text(self, payload: dict[str, Any]) -> None:
        """Envio bloqueante de mensagem de texto.

        Raises:
            RelayError: send_failed se o backend não responder 200;
                server_error em falha de transporte.
        """
        outcome = await self._client.send_message(payload)
        if not outcome.success:
            raise RelayError(ErrorCode.SEND_FAILED, "sending message to telegram failed")

    async def send_document(self, payload: DocumentPayload) -> None:
        """Envio bloqueante de documento."""
        outcome = await self._client.send_document(payload)
        if not outcome.success:
            raise RelayError(ErrorCode.SEND_FAILED, "sending file to telegram failed")

    def send_document_detached(self, payload: DocumentPayload, *, channel: str) -> None:
        """Entrega o documento a uma task destacada e retorna imediatamente."""
        self._background.schedule(
            functools.partial(self._send_document_logged, payload, channel=channel),
            channel=channel,
        )

    async def _send_document_logged(self, payload: DocumentPayload, *, channel: str) -> None:
        """Executa o envio destacado sem propagar falhas."""
        try:
            outcome = await self._client.send_document(payload)
        except Exception:
            logger.exception(
                "relay_background_send_failed",
                extra={"channel": channel, "reason": "exception"},
            )
            return

        if not outcome.success:
            logger.error(
                "relay_background_send_failed",
                extra={
                    "channel": channel,
                    "reason": "backend_rejected",
                    "status_code": outcome.backend_status,
                },
            )
            return

        logger.info("relay_background_send_completed", extra={"channel": channel})
