"""Settings comuns ao serviço (ambiente, nome, logging)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

Environment = Literal["development", "staging", "production"]

_VALID_ENVIRONMENTS = frozenset({"development", "staging", "production"})
_ENVIRONMENT_ALIASES = {"prod": "production", "stage": "staging", "dev": "development"}


@dataclass(frozen=True)
class BaseSettings:
    """Configurações base do relay.

    Attributes:
        environment: development|staging|production
        service_name: Nome do serviço nos logs
        debug: Logs em texto em vez de JSON
        log_level: Nível de log do root logger
    """

    environment: Environment = "development"
    service_name: str = "iris-relay"
    debug: bool = False
    log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def strict_validation(self) -> bool:
        """Em staging/produção, settings inválidas impedem o boot."""
        return self.environment in ("staging", "production")

    def validate(self) -> list[str]:
        """Valida configurações base.

        Returns:
            Lista de erros (vazia = OK).
        """
        errors: list[str] = []
        if self.environment not in _VALID_ENVIRONMENTS:
            errors.append(f"ENVIRONMENT inválido: {self.environment}")
        if not self.service_name:
            errors.append("SERVICE_NAME não pode ser vazio")
        return errors


def _parse_environment(raw: str) -> Environment:
    value = raw.strip().lower()
    value = _ENVIRONMENT_ALIASES.get(value, value)
    if value in _VALID_ENVIRONMENTS:
        return value  # type: ignore[return-value]
    return "development"


def _load_from_env() -> BaseSettings:
    """Carrega BaseSettings de variáveis de ambiente."""
    return BaseSettings(
        environment=_parse_environment(os.getenv("ENVIRONMENT", "development")),
        service_name=os.getenv("SERVICE_NAME", "iris-relay"),
        debug=os.getenv("DEBUG", "").lower() in ("true", "1", "yes"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


@lru_cache(maxsize=1)
def get_base_settings() -> BaseSettings:
    """Retorna instância cacheada de BaseSettings."""
    return _load_from_env()
