"""Gerenciamento de correlation_id para rastreamento de requisições.

O correlation_id chega no header `x-correlation-id` (ou é gerado),
é injetado em todos os logs e devolvido no header da resposta.
Usa ContextVar: tasks criadas com asyncio.create_task herdam o valor,
então envios em background continuam rastreáveis.

Uso:
    from app.observability import get_correlation_id, set_correlation_id

    token = set_correlation_id(request.headers.get(CORRELATION_HEADER))
    try:
        # processar request
    finally:
        reset_correlation_id(token)
"""

from __future__ import annotations

import re
import uuid
from contextvars import ContextVar, Token

CORRELATION_HEADER = "x-correlation-id"

# Valores aceitos do cliente; qualquer outra coisa é substituída por UUID
_VALID_CORRELATION_ID = re.compile(r"[A-Za-z0-9._:\-]{1,128}")

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id do contexto atual.

    Returns:
        correlation_id ou string vazia se não definido.
    """
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id no contexto atual.

    Valores ausentes ou fora do formato aceito (header controlado pelo
    cliente, ecoado na resposta) são trocados por um UUID novo.

    Args:
        correlation_id: ID a definir.

    Returns:
        Token para reset posterior via reset_correlation_id().
    """
    if correlation_id and _VALID_CORRELATION_ID.fullmatch(correlation_id):
        value = correlation_id
    else:
        value = generate_correlation_id()
    return _correlation_id.set(value)


def reset_correlation_id(token: Token[str]) -> None:
    """Restaura o correlation_id ao valor anterior."""
    _correlation_id.reset(token)


def generate_correlation_id() -> str:
    """Gera um novo correlation_id (UUID v4)."""
    return str(uuid.uuid4())
