"""Protocolos de construção de payload para o backend."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.domain.channel import Channel
    from app.domain.relay import FileRelay, TextRelay

# (file_name, conteúdo, mime_type) no formato de `files=` do httpx
DocumentPart = tuple[str | None, bytes, str | None]


@dataclass(frozen=True, slots=True)
class DocumentPayload:
    """Corpo multipart de envio de documento.

    Attributes:
        fields: Partes de texto (chat_id, caption, parse_mode, message_thread_id)
        document: Parte binária do documento
    """

    fields: dict[str, str]
    document: DocumentPart = field(repr=False)


class RelayPayloadBuilderProtocol(Protocol):
    """Contrato mínimo para construir payloads de relay."""

    def ensure_file_size(self, size: int) -> None: ...

    def build_text(self, channel: Channel, request: TextRelay) -> dict[str, Any]: ...

    def build_document(self, channel: Channel, request: FileRelay) -> DocumentPayload: ...
