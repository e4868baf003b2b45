"""Protocolos e contratos do core da aplicação."""

from .http_client import TelegramClientProtocol
from .payload_builder import DocumentPart, DocumentPayload, RelayPayloadBuilderProtocol

__all__ = [
    "DocumentPart",
    "DocumentPayload",
    "RelayPayloadBuilderProtocol",
    "TelegramClientProtocol",
]
