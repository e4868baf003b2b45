"""Verificação de credenciais de canal."""

from __future__ import annotations

import hmac
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain.channel import Channel


def authorize(channel: Channel, presented_secret: str) -> bool:
    """Compara o segredo apresentado com o do canal em tempo constante."""
    return hmac.compare_digest(
        channel.secret.encode("utf-8"),
        presented_secret.encode("utf-8"),
    )
