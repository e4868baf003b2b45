"""Endpoints de health check (liveness e readiness)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

logger = logging.getLogger(__name__)

router = APIRouter()

SERVICE_VERSION = "0.1.0"


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str
    timestamp: str
    version: str = SERVICE_VERSION


@dataclass(frozen=True, slots=True)
class DependencyCheck:
    """Resultado de checagem de dependência."""

    status: Literal["ok", "failed"]
    detail: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {"status": self.status, "detail": self.detail}


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe: verifica se o serviço está rodando."""
    return HealthResponse(
        status="healthy",
        service="iris-relay",
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness probe: canais carregados, token configurado, cliente aberto."""
    context = getattr(request.app.state, "relay", None)
    if context is None:
        checks = {
            "channels": DependencyCheck(status="failed", detail="not_initialized"),
            "telegram": DependencyCheck(status="failed", detail="not_initialized"),
        }
    else:
        checks = {
            "channels": _check_channels(len(context.registry)),
            "telegram": _check_telegram(
                has_token=bool(context.telegram_settings.bot_token),
                client_closed=context.client.is_closed,
            ),
        }

    ready = all(check.status == "ok" for check in checks.values())
    if not ready:
        logger.warning(
            "readiness_check_failed",
            extra={name: check.detail for name, check in checks.items() if check.detail},
        )

    payload = {
        "status": "ready" if ready else "not_ready",
        "checks": {name: check.as_dict() for name, check in checks.items()},
        "background_sends": context.background.active_count if context is not None else 0,
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return JSONResponse(content=payload, status_code=200 if ready else 503)


def _check_channels(channel_count: int) -> DependencyCheck:
    if channel_count == 0:
        return DependencyCheck(status="failed", detail="no_channels")
    return DependencyCheck(status="ok", detail=f"{channel_count} channels")


def _check_telegram(*, has_token: bool, client_closed: bool) -> DependencyCheck:
    if not has_token:
        return DependencyCheck(status="failed", detail="missing_bot_token")
    if client_closed:
        return DependencyCheck(status="failed", detail="client_closed")
    return DependencyCheck(status="ok")
