"""Conector Telegram - adapter de borda para a Bot API.

Único ponto de IO com o backend de mensagens:
- HTTP client compartilhado (sendMessage, sendDocument)
- Classificação de respostas (sucesso = status 200)
- Parsing de erros da Bot API
"""

from .errors import TelegramApiError, parse_telegram_error
from .http_client import TelegramHttpClient, create_telegram_http_client
from .responses import classify_response

__all__ = [
    "TelegramApiError",
    "TelegramHttpClient",
    "classify_response",
    "create_telegram_http_client",
    "parse_telegram_error",
]
