"""Settings do pipeline de relay.

Limites de upload, modo de despacho de arquivos e parâmetros do
servidor HTTP.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

DEFAULT_CONFIG_PATH = "config.yaml"
DEFAULT_MAX_FILE_SIZE_BYTES = 50_000_000
DEFAULT_PORT = 7023


@dataclass(frozen=True)
class RelaySettings:
    """Configurações do relay.

    Attributes:
        config_path: Caminho do arquivo YAML de canais
        max_file_size_bytes: Teto de tamanho de arquivo (rejeita >= teto)
        file_dispatch_mode: "async" (fire-and-forget) ou "inline" (bloqueante)
        max_concurrent_sends: Limite de envios em background simultâneos
        shutdown_drain_seconds: Espera por envios pendentes no shutdown
        host: Host de bind do servidor
        port: Porta de bind do servidor
        uds: Socket unix opcional (substitui host/port)
    """

    config_path: str = DEFAULT_CONFIG_PATH
    max_file_size_bytes: int = DEFAULT_MAX_FILE_SIZE_BYTES
    file_dispatch_mode: str = "async"
    max_concurrent_sends: int = 100
    shutdown_drain_seconds: float = 30.0
    host: str = "127.0.0.1"
    port: int = DEFAULT_PORT
    uds: str | None = None

    @property
    def detached_file_dispatch(self) -> bool:
        """True quando o envio de arquivos não bloqueia o chamador."""
        return self.file_dispatch_mode == "async"

    def validate(self) -> list[str]:
        """Valida configurações do relay."""
        errors: list[str] = []
        if not self.config_path:
            errors.append("RELAY_CONFIG_PATH não pode ser vazio")
        if self.max_file_size_bytes <= 0:
            errors.append("RELAY_MAX_FILE_SIZE_BYTES deve ser > 0")
        if self.file_dispatch_mode not in ("async", "inline"):
            errors.append("RELAY_FILE_DISPATCH_MODE deve ser 'async' ou 'inline'")
        if self.max_concurrent_sends <= 0:
            errors.append("RELAY_MAX_CONCURRENT_SENDS deve ser > 0")
        if self.shutdown_drain_seconds < 0:
            errors.append("RELAY_SHUTDOWN_DRAIN_SECONDS deve ser >= 0")
        if not 0 < self.port < 65536:
            errors.append("RELAY_PORT fora do intervalo válido")
        return errors


def _load_from_env() -> RelaySettings:
    """Carrega RelaySettings de variáveis de ambiente."""
    return RelaySettings(
        config_path=os.getenv("RELAY_CONFIG_PATH", DEFAULT_CONFIG_PATH),
        max_file_size_bytes=int(
            os.getenv("RELAY_MAX_FILE_SIZE_BYTES", str(DEFAULT_MAX_FILE_SIZE_BYTES))
        ),
        file_dispatch_mode=os.getenv("RELAY_FILE_DISPATCH_MODE", "async").lower(),
        max_concurrent_sends=int(os.getenv("RELAY_MAX_CONCURRENT_SENDS", "100")),
        shutdown_drain_seconds=float(os.getenv("RELAY_SHUTDOWN_DRAIN_SECONDS", "30")),
        host=os.getenv("RELAY_HOST", "127.0.0.1"),
        port=int(os.getenv("RELAY_PORT", str(DEFAULT_PORT))),
        uds=os.getenv("RELAY_UDS") or None,
    )


@lru_cache(maxsize=1)
def get_relay_settings() -> RelaySettings:
    """Retorna instância cacheada de RelaySettings."""
    return _load_from_env()
