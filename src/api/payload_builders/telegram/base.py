"""Campos comuns aos payloads da Bot API."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain.channel import Channel
    from app.domain.relay import MarkupMode


def destination_fields(channel: Channel) -> dict[str, str]:
    """chat_id sempre; message_thread_id só quando o canal tem thread."""
    fields = {"chat_id": channel.destination_id}
    if channel.thread_id is not None:
        fields["message_thread_id"] = channel.thread_id
    return fields


def parse_mode_value(markup_mode: MarkupMode | None) -> str | None:
    """Valor de parse_mode, ou None quando o campo deve ser omitido.

    A presença do campo muda a validação de formatação do backend,
    então nunca é enviado vazio ou nulo.
    """
    if markup_mode is None:
        return None
    return markup_mode.wire_value
