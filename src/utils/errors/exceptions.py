"""Taxonomia de erros do relay.

Todo erro de domínio vira um único tipo (`RelayError`) que carrega
status HTTP, código e texto de debug opcional. O status é derivado
exclusivamente do código.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Códigos de erro expostos ao chamador (snake_case no wire)."""

    UNKNOWN = "unknown"
    BAD_REQUEST = "bad_request"
    NOT_FOUND = "not_found"
    FILE_TOO_BIG = "file_too_big"
    SEND_FAILED = "send_failed"
    SERVER_ERROR = "server_error"

    @property
    def status(self) -> int:
        """Status HTTP associado ao código."""
        return _STATUS_BY_CODE[self]


_STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.UNKNOWN: 500,
    ErrorCode.BAD_REQUEST: 400,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.FILE_TOO_BIG: 400,
    ErrorCode.SEND_FAILED: 500,
    ErrorCode.SERVER_ERROR: 500,
}


class RelayError(Exception):
    """Erro de domínio do relay, convertido em resposta JSON na borda.

    Args:
        code: Código do erro.
        debug: Texto curto de diagnóstico, seguro para o chamador.
    """

    def __init__(self, code: ErrorCode, debug: str | None = None) -> None:
        super().__init__(debug or code.value)
        self.code = code
        self.debug = debug

    @property
    def status(self) -> int:
        return self.code.status

    @classmethod
    def server_error(cls, debug: str | None = None) -> RelayError:
        """Erro genérico de servidor, sem detalhes internos."""
        return cls(ErrorCode.SERVER_ERROR, debug)

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "code": self.code.value,
            "debug": self.debug,
        }

    def __repr__(self) -> str:
        return f"RelayError(code={self.code.value!r}, debug={self.debug!r})"
