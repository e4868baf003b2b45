"""Rotas de relay (send, send-mp, send-file)."""

from api.routes.relay.router import get_relay_context, router

__all__ = ["get_relay_context", "router"]
