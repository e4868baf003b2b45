"""Payload builders: construção de payloads para APIs externas.

Estrutura:
- telegram/: Telegram Bot API (sendMessage JSON, sendDocument multipart)
"""

__all__: list[str] = []
