"""Use case de relay autenticado por canal.

Ordem das verificações (define a precedência de erros observável):
1. tamanho do arquivo (apenas relay de arquivo)
2. lookup do canal
3. verificação de credencial
4. construção do payload
5. despacho
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.observability import record_relay_result
from app.services.credentials import authorize
from utils.errors import ErrorCode, RelayError

if TYPE_CHECKING:
    from app.domain.channel import Channel, ChannelRegistry
    from app.domain.relay import FileRelay, TextRelay
    from app.protocols import RelayPayloadBuilderProtocol
    from app.services.relay_dispatcher import RelayDispatcher

logger = logging.getLogger(__name__)

# Mesmo debug para canal inexistente e secret errado (evita enumeração)
_NO_CHANNEL = "no channel"


class RelayMessageUseCase:
    """Orquestra lookup, credencial, build e despacho de um relay."""

    def __init__(
        self,
        registry: ChannelRegistry,
        builder: RelayPayloadBuilderProtocol,
        dispatcher: RelayDispatcher,
        *,
        detached_file_dispatch: bool = True,
    ) -> None:
        self._registry = registry
        self._builder = builder
        self._dispatcher = dispatcher
        self._detached_file_dispatch = detached_file_dispatch

    async def relay_text(self, request: TextRelay) -> None:
        """Relay bloqueante de texto.

        Raises:
            RelayError: not_found, send_failed ou server_error.
        """
        channel = self._resolve_channel(request.channel, request.secret, kind="text")
        payload = self._builder.build_text(channel, request)
        try:
            await self._dispatcher.send_text(payload)
        except RelayError:
            record_relay_result(request.channel, "text", "failed")
            raise
        record_relay_result(request.channel, "text", "sent")

    async def relay_file(self, request: FileRelay) -> None:
        """Relay de arquivo; destacado ou bloqueante conforme configuração.

        No modo destacado retorna assim que o payload é entregue à task
        de background; falhas posteriores do backend só aparecem nos logs.

        Raises:
            RelayError: file_too_big, not_found e, no modo bloqueante,
                send_failed ou server_error.
        """
        try:
            self._builder.ensure_file_size(request.size)
        except RelayError:
            logger.warning(
                "relay_file_too_big",
                extra={"channel": request.channel, "size": request.size},
            )
            record_relay_result(request.channel, "file", "rejected")
            raise

        channel = self._resolve_channel(request.channel, request.secret, kind="file")
        payload = self._builder.build_document(channel, request)

        if self._detached_file_dispatch:
            self._dispatcher.send_document_detached(payload, channel=request.channel)
            record_relay_result(request.channel, "file", "scheduled")
            return

        try:
            await self._dispatcher.send_document(payload)
        except RelayError:
            record_relay_result(request.channel, "file", "failed")
            raise
        record_relay_result(request.channel, "file", "sent")

    def _resolve_channel(self, name: str, secret: str, *, kind: str) -> Channel:
        channel = self._registry.lookup(name)
        if channel is None or not authorize(channel, secret):
            logger.warning(
                "relay_channel_rejected",
                extra={
                    "channel": name,
                    "kind": kind,
                    "reason": "unknown_channel" if channel is None else "bad_secret",
                },
            )
            record_relay_result(name, kind, "rejected")
            raise RelayError(ErrorCode.NOT_FOUND, _NO_CHANNEL)
        return channel
