"""Loader do arquivo de canais (YAML).

Formato:

    tel_token: "123456:ABC"        # opcional se TELEGRAM_BOT_TOKEN definido
    channels:
      ops:
        chat: "-100123"
        thread: "7"                # opcional
        pass: "s3cr3t"

Lido uma única vez no startup. Arquivo ausente ou inválido impede o
boot (ChannelsFileError).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from app.domain.channel import Channel, ChannelRegistry

logger = logging.getLogger(__name__)


class ChannelsFileError(Exception):
    """Erro ao carregar o arquivo de canais."""


@dataclass(frozen=True)
class ChannelsFile:
    """Conteúdo validado do arquivo de canais."""

    registry: ChannelRegistry
    bot_token: str = ""


def load_channels_file(path: str | Path) -> ChannelsFile:
    """Carrega e valida o arquivo de canais.

    Args:
        path: Caminho do YAML

    Returns:
        ChannelsFile com registry imutável e token opcional

    Raises:
        ChannelsFileError: Se arquivo não existir ou conteúdo inválido
    """
    config_path = Path(path)
    logger.info("channels_file_reading", extra={"path": str(config_path)})

    try:
        with config_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as exc:
        raise ChannelsFileError(f"arquivo de canais não encontrado: {config_path}") from exc
    except OSError as exc:
        raise ChannelsFileError(f"não foi possível ler {config_path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ChannelsFileError(f"YAML inválido em {config_path}: {exc}") from exc

    return parse_channels_config(data, source=str(config_path))


def parse_channels_config(data: Any, *, source: str = "<memory>") -> ChannelsFile:
    """Valida o conteúdo já desserializado do arquivo de canais."""
    if not isinstance(data, dict):
        raise ChannelsFileError(f"{source}: conteúdo deve ser um mapeamento")

    raw_channels = data.get("channels") or {}
    if not isinstance(raw_channels, dict):
        raise ChannelsFileError(f"{source}: 'channels' deve ser um mapeamento")

    channels = {
        str(name): _parse_channel(str(name), raw, source)
        for name, raw in raw_channels.items()
    }

    bot_token = data.get("tel_token") or ""
    if not isinstance(bot_token, str):
        raise ChannelsFileError(f"{source}: 'tel_token' deve ser texto")

    registry = ChannelRegistry(channels)
    logger.info(
        "channels_file_loaded",
        extra={"channel_count": len(registry), "has_token": bool(bot_token)},
    )
    return ChannelsFile(registry=registry, bot_token=bot_token)


def _parse_channel(name: str, raw: Any, source: str) -> Channel:
    if not isinstance(raw, dict):
        raise ChannelsFileError(f"{source}: canal '{name}' deve ser um mapeamento")

    chat = raw.get("chat")
    secret = raw.get("pass")
    thread = raw.get("thread")

    # IDs numéricos no YAML (ex: chat: -100123) são aceitos e viram texto
    if isinstance(chat, int) and not isinstance(chat, bool):
        chat = str(chat)
    if isinstance(thread, int) and not isinstance(thread, bool):
        thread = str(thread)

    if not isinstance(chat, str) or not chat:
        raise ChannelsFileError(f"{source}: canal '{name}' sem 'chat'")
    if not isinstance(secret, str) or not secret:
        raise ChannelsFileError(f"{source}: canal '{name}' sem 'pass'")
    if thread is not None and not isinstance(thread, str):
        raise ChannelsFileError(f"{source}: canal '{name}' com 'thread' inválido")

    return Channel(destination_id=chat, secret=secret, thread_id=thread)
