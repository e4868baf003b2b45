"""Cliente HTTP para a Telegram Bot API.

Envolve um único `httpx.AsyncClient` compartilhado pelo processo
(pool de conexões, seguro para uso concorrente sem lock externo).

- sendMessage: corpo JSON
- sendDocument: corpo multipart
- Falhas de rede/timeout viram RelayError(server_error) com debug
  genérico; a causa vai para o log
- Nunca loga a URL (contém o token do bot)
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

import httpx

from api.connectors.telegram.responses import classify_response
from app.observability import record_dispatch_latency
from utils.errors import RelayError

if TYPE_CHECKING:
    from app.domain.relay import DispatchOutcome
    from app.protocols import DocumentPayload
    from config.settings import TelegramSettings

logger = logging.getLogger(__name__)

SEND_MESSAGE = "sendMessage"
SEND_DOCUMENT = "sendDocument"


class TelegramHttpClient:
    """Cliente da Bot API sobre um httpx.AsyncClient compartilhado."""

    def __init__(self, client: httpx.AsyncClient, settings: TelegramSettings) -> None:
        self._client = client
        self._settings = settings

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    async def send_message(self, payload: dict[str, Any]) -> DispatchOutcome:
        """Envia mensagem de texto (JSON)."""
        return await self._post(SEND_MESSAGE, self._settings.send_message_url, json=payload)

    async def send_document(self, payload: DocumentPayload) -> DispatchOutcome:
        """Envia documento (multipart)."""
        return await self._post(
            SEND_DOCUMENT,
            self._settings.send_document_url,
            data=payload.fields,
            files={"document": payload.document},
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _post(self, operation: str, url: str, **kwargs: Any) -> DispatchOutcome:
        started_at = time.perf_counter()
        try:
            response = await self._client.post(url, **kwargs)
        except httpx.HTTPError as exc:
            raise _transport_error(operation, exc, started_at) from exc

        record_dispatch_latency(
            operation,
            (time.perf_counter() - started_at) * 1000,
            response.status_code,
        )
        return classify_response(response.status_code, response.text, operation=operation)


def _transport_error(operation: str, exc: httpx.HTTPError, started_at: float) -> RelayError:
    """Converte erro do httpx na taxonomia do relay, logando a causa."""
    elapsed_ms = (time.perf_counter() - started_at) * 1000
    record_dispatch_latency(operation, elapsed_ms)
    logger.error(
        "telegram_transport_error",
        extra={
            "operation": operation,
            "error_type": type(exc).__name__,
            "elapsed_ms": round(elapsed_ms, 2),
        },
    )
    return RelayError.server_error("httpx.HTTPError")


def create_telegram_http_client(
    settings: TelegramSettings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> TelegramHttpClient:
    """Factory do cliente compartilhado.

    Args:
        settings: TelegramSettings com token e timeout.
        transport: Transport alternativo (ex: httpx.MockTransport em testes).
    """
    client = httpx.AsyncClient(
        timeout=httpx.Timeout(settings.request_timeout_seconds),
        limits=httpx.Limits(max_connections=settings.max_connections),
        transport=transport,
    )
    logger.info(
        "telegram_client_created",
        extra={
            "api_base_url": settings.api_base_url,
            "timeout_seconds": settings.request_timeout_seconds,
        },
    )
    return TelegramHttpClient(client, settings)
