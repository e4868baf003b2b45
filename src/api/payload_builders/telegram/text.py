"""Builder para mensagens de texto (sendMessage)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from api.payload_builders.telegram.base import destination_fields, parse_mode_value

if TYPE_CHECKING:
    from app.domain.channel import Channel
    from app.domain.relay import TextRelay


class TextPayloadBuilder:
    """Builder de corpo JSON para sendMessage."""

    def build(self, channel: Channel, request: TextRelay) -> dict[str, Any]:
        """Constrói payload de texto.

        Args:
            channel: Canal já autorizado
            request: Pedido de relay de texto

        Returns:
            Corpo JSON conforme Bot API
        """
        payload: dict[str, Any] = destination_fields(channel)
        payload["text"] = request.text

        parse_mode = parse_mode_value(request.markup_mode)
        if parse_mode is not None:
            payload["parse_mode"] = parse_mode

        payload["link_preview_options"] = {
            "is_disabled": False,
            "prefer_small_media": True,
        }
        return payload
