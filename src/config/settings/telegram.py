"""Settings específicas de Telegram.

Configurações do backend Telegram via Bot API.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

# Constantes da Telegram Bot API
TELEGRAM_API_BASE_URL: str = "https://api.telegram.org"

# Uploads de até 50MB e respostas lentas do backend
DEFAULT_REQUEST_TIMEOUT_SECONDS: float = 500.0


@dataclass(frozen=True)
class TelegramSettings:
    """Configurações do backend Telegram.

    Attributes:
        bot_token: Token do bot (TELEGRAM_BOT_TOKEN; o arquivo de canais
            pode fornecer `tel_token` quando a env não está definida)
        api_base_url: URL base da API
        request_timeout_seconds: Timeout das requisições HTTP
        max_connections: Limite do pool de conexões do cliente compartilhado
    """

    bot_token: str = ""
    api_base_url: str = TELEGRAM_API_BASE_URL
    request_timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS
    max_connections: int = 100

    @property
    def api_endpoint(self) -> str:
        """URL base completa da API com token do bot."""
        if not self.bot_token:
            raise ValueError("bot_token é obrigatório")
        return f"{self.api_base_url.rstrip('/')}/bot{self.bot_token}"

    @property
    def send_message_url(self) -> str:
        return f"{self.api_endpoint}/sendMessage"

    @property
    def send_document_url(self) -> str:
        return f"{self.api_endpoint}/sendDocument"

    def with_bot_token(self, bot_token: str) -> TelegramSettings:
        """Cópia com o token informado (usado quando vem do arquivo de canais)."""
        return TelegramSettings(
            bot_token=bot_token,
            api_base_url=self.api_base_url,
            request_timeout_seconds=self.request_timeout_seconds,
            max_connections=self.max_connections,
        )

    def validate(self) -> list[str]:
        """Valida configurações mínimas de Telegram."""
        errors: list[str] = []
        if not self.bot_token:
            errors.append("TELEGRAM_BOT_TOKEN não configurado")
        if self.request_timeout_seconds <= 0:
            errors.append("TELEGRAM_REQUEST_TIMEOUT_SECONDS deve ser > 0")
        if self.max_connections <= 0:
            errors.append("TELEGRAM_MAX_CONNECTIONS deve ser > 0")
        return errors


def _load_from_env() -> TelegramSettings:
    """Carrega TelegramSettings de variáveis de ambiente."""
    return TelegramSettings(
        bot_token=os.getenv("TELEGRAM_BOT_TOKEN", ""),
        api_base_url=os.getenv("TELEGRAM_API_BASE_URL", TELEGRAM_API_BASE_URL),
        request_timeout_seconds=float(
            os.getenv(
                "TELEGRAM_REQUEST_TIMEOUT_SECONDS",
                str(DEFAULT_REQUEST_TIMEOUT_SECONDS),
            )
        ),
        max_connections=int(os.getenv("TELEGRAM_MAX_CONNECTIONS", "100")),
    )


@lru_cache(maxsize=1)
def get_telegram_settings() -> TelegramSettings:
    """Retorna instância cacheada de TelegramSettings."""
    return _load_from_env()
