"""Canais autorizados e o registry imutável que os indexa.

O registry é montado uma vez no startup a partir do arquivo de canais
e compartilhado (somente leitura) por todas as requisições.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping


@dataclass(frozen=True, slots=True)
class Channel:
    """Destino autorizado do relay.

    O nome do canal é a chave do registry e não fica no valor.

    Attributes:
        destination_id: ID do chat de destino no backend
        thread_id: Tópico/thread dentro do chat (opcional)
        secret: Segredo compartilhado apresentado pelo chamador
    """

    destination_id: str
    secret: str
    thread_id: str | None = None

    def __repr__(self) -> str:
        # secret fora do repr para não vazar em logs/tracebacks
        return f"Channel(destination_id={self.destination_id!r}, thread_id={self.thread_id!r})"


class ChannelRegistry:
    """Mapeamento somente leitura de nome de canal para `Channel`."""

    __slots__ = ("_channels",)

    def __init__(self, channels: Mapping[str, Channel]) -> None:
        self._channels = MappingProxyType(dict(channels))

    def lookup(self, name: str) -> Channel | None:
        """Retorna o canal ou None; ausência não é erro nesta camada."""
        return self._channels.get(name)

    def names(self) -> list[str]:
        return sorted(self._channels)

    def __contains__(self, name: object) -> bool:
        return name in self._channels

    def __len__(self) -> int:
        return len(self._channels)

    def __iter__(self) -> Iterator[str]:
        return iter(self._channels)

    def __repr__(self) -> str:
        return f"ChannelRegistry(channels={self.names()!r})"
