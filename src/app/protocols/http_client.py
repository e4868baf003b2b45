"""Protocolos HTTP usados pelo app.

Evita dependência direta da camada api.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.domain.relay import DispatchOutcome
    from app.protocols.payload_builder import DocumentPayload


class TelegramClientProtocol(Protocol):
    """Contrato mínimo para cliente HTTP do backend.

    Falhas de transporte chegam como RelayError(server_error);
    respostas != 200 chegam como DispatchOutcome de falha.
    """

    async def send_message(self, payload: dict[str, Any]) -> DispatchOutcome: ...

    async def send_document(self, payload: DocumentPayload) -> DispatchOutcome: ...

    async def aclose(self) -> None: ...

    @property
    def is_closed(self) -> bool: ...
