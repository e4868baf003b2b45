"""Builders de payload para a Telegram Bot API.

`TelegramPayloadBuilder` implementa RelayPayloadBuilderProtocol
combinando os builders de texto e documento.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from api.payload_builders.telegram.document import DocumentPayloadBuilder, file_too_big_error
from api.payload_builders.telegram.text import TextPayloadBuilder

if TYPE_CHECKING:
    from app.domain.channel import Channel
    from app.domain.relay import FileRelay, TextRelay
    from app.protocols import DocumentPayload


class TelegramPayloadBuilder:
    """Fachada dos builders de texto e documento."""

    def __init__(self, max_file_size_bytes: int) -> None:
        self._text = TextPayloadBuilder()
        self._document = DocumentPayloadBuilder(max_file_size_bytes)

    def ensure_file_size(self, size: int) -> None:
        self._document.ensure_size(size)

    def build_text(self, channel: Channel, request: TextRelay) -> dict[str, Any]:
        return self._text.build(channel, request)

    def build_document(self, channel: Channel, request: FileRelay) -> DocumentPayload:
        return self._document.build(channel, request)


__all__ = [
    "DocumentPayloadBuilder",
    "TelegramPayloadBuilder",
    "TextPayloadBuilder",
    "file_too_big_error",
]
