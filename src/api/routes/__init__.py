"""Rotas HTTP da API.

Responsabilidades:
- Definir endpoints HTTP (relay, health)
- Validação inicial de request (corpo, formulário multipart)
- Delegação para o use case de relay
- Respostas HTTP e JSON de erro

Estrutura:
- routes/relay/: send, send-mp, send-file
- routes/health/: health checks e readiness
- routes/errors.py: conversão de RelayError em resposta

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
