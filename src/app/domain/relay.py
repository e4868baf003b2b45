"""Modelos transitórios do pipeline de relay.

Requisições de relay (texto ou arquivo), modo de markup e o resultado
de um despacho ao backend.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

# Limite de caracteres do corpo do backend guardado para diagnóstico
BODY_EXCERPT_LIMIT = 2000


class MarkupMode(StrEnum):
    """Dialetos de formatação repassados ao backend como `parse_mode`."""

    MARKDOWN = "Markdown"
    MARKDOWN_V2 = "MarkdownV2"
    HTML = "HTML"
    NONE = "None"

    @property
    def wire_value(self) -> str | None:
        """Valor enviado ao backend; NONE significa omitir o campo."""
        if self is MarkupMode.NONE:
            return None
        return self.value


@dataclass(frozen=True, slots=True)
class TextRelay:
    """Pedido de relay de mensagem de texto."""

    channel: str
    secret: str
    text: str
    markup_mode: MarkupMode | None = None


@dataclass(frozen=True, slots=True)
class FileRelay:
    """Pedido de relay de arquivo com legenda.

    `size` vem do upload e é validado antes de qualquer despacho.
    """

    channel: str
    secret: str
    caption: str
    file_bytes: bytes = field(repr=False)
    size: int
    file_name: str | None = None
    mime_type: str | None = None
    markup_mode: MarkupMode | None = None


@dataclass(frozen=True, slots=True)
class DispatchOutcome:
    """Resultado de uma chamada ao backend (não persistido)."""

    success: bool
    backend_status: int
    backend_body_excerpt: str | None = None

    @classmethod
    def ok(cls, status: int = 200) -> DispatchOutcome:
        return cls(success=True, backend_status=status)

    @classmethod
    def failure(cls, status: int, body: str | None) -> DispatchOutcome:
        excerpt = body[:BODY_EXCERPT_LIMIT] if body else body
        return cls(success=False, backend_status=status, backend_body_excerpt=excerpt)
