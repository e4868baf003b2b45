"""Factory de wiring do relay (composition root).

Monta o contexto compartilhado do processo: registry de canais,
cliente HTTP do backend, fila de envios em background e use case.
Criado uma vez no startup e lido (somente leitura) por todos os handlers via app.state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from api.connectors.telegram import create_telegram_http_client
from api.payload_builders.telegram import TelegramPayloadBuilder
from app.bootstrap.channels_file import load_channels_file
from app.services import BackgroundSender, RelayDispatcher
from app.use_cases.relay import RelayMessageUseCase
from config.logging import register_log_secret
from config.settings import get_relay_settings, get_telegram_settings

if TYPE_CHECKING:
    import httpx

    from app.domain.channel import ChannelRegistry
    from app.protocols import TelegramClientProtocol
    from config.settings import RelaySettings, TelegramSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RelayContext:
    """Estado compartilhado e imutável do processo."""

    registry: ChannelRegistry
    client: TelegramClientProtocol
    background: BackgroundSender
    use_case: RelayMessageUseCase
    relay_settings: RelaySettings
    telegram_settings: TelegramSettings

    async def aclose(self) -> None:
        await self.client.aclose()


def build_relay_context(
    *,
    registry: ChannelRegistry,
    relay_settings: RelaySettings,
    telegram_settings: TelegramSettings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> RelayContext:
    """Conecta implementações concretas aos protocolos do use case."""
    register_log_secret(telegram_settings.bot_token)
    client = create_telegram_http_client(telegram_settings, transport=transport)
    background = BackgroundSender(relay_settings.max_concurrent_sends)
    use_case = RelayMessageUseCase(
        registry=registry,
        builder=TelegramPayloadBuilder(relay_settings.max_file_size_bytes),
        dispatcher=RelayDispatcher(client, background),
        detached_file_dispatch=relay_settings.detached_file_dispatch,
    )
    return RelayContext(
        registry=registry,
        client=client,
        background=background,
        use_case=use_case,
        relay_settings=relay_settings,
        telegram_settings=telegram_settings,
    )


def create_relay_context(config_path: str | None = None) -> RelayContext:
    """Cria o contexto a partir das settings de ambiente e do arquivo de canais.

    O token de TELEGRAM_BOT_TOKEN tem prioridade sobre `tel_token` do arquivo.

    Raises:
        ChannelsFileError: Se o arquivo de canais for inválido.
    """
    relay_settings = get_relay_settings()
    telegram_settings = get_telegram_settings()

    channels_file = load_channels_file(config_path or relay_settings.config_path)
    if not telegram_settings.bot_token and channels_file.bot_token:
        telegram_settings = telegram_settings.with_bot_token(channels_file.bot_token)

    context = build_relay_context(
        registry=channels_file.registry,
        relay_settings=relay_settings,
        telegram_settings=telegram_settings,
    )
    logger.info(
        "relay_context_created",
        extra={
            "channel_count": len(channels_file.registry),
            "file_dispatch_mode": relay_settings.file_dispatch_mode,
        },
    )
    return context
