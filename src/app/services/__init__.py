"""Serviços de aplicação.

Verificação de credenciais e despacho (bloqueante ou destacado)
de payloads ao backend.
"""

from app.services.background_sends import BackgroundSender
from app.services.credentials import authorize
from app.services.relay_dispatcher import RelayDispatcher

__all__ = [
    "BackgroundSender",
    "RelayDispatcher",
    "authorize",
]
