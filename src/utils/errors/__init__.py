"""Exceções utilitárias compartilhadas."""

from .exceptions import ErrorCode, RelayError

__all__ = [
    "ErrorCode",
    "RelayError",
]
