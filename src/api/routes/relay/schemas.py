"""Schemas de entrada das rotas de relay."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from app.domain.relay import MarkupMode


class SendBody(BaseModel):
    """Corpo JSON de POST /send."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    channel: str = Field(..., description="Nome do canal configurado.")
    pass_: str = Field(..., alias="pass", description="Segredo do canal.")
    text: str = Field(..., description="Texto da mensagem.")
    parse_mode: MarkupMode | None = Field(
        default=None,
        description="Modo de markup; omitido = padrão do backend.",
    )
