"""Connectors: adapters de borda para APIs externas.

Estrutura:
- telegram/: Telegram Bot API (backend de entrega do relay)
"""

__all__: list[str] = []
