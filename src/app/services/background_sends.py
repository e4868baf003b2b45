"""Envios em background (fire-and-forget) com limite de concorrência.

Cada `BackgroundSender` é dono do seu semáforo e do seu conjunto de
tasks; o contexto do relay cria um no startup e o drena no shutdown.
As tasks não estão ligadas à requisição de origem: se o chamador
desconecta, o envio continua. Falhas são apenas logadas.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENT_SENDS = 100


class BackgroundSender:
    """Agenda envios destacados, no máximo `max_concurrent` ao mesmo tempo.

    Recebe uma fábrica de corrotina em vez da corrotina pronta: ela só
    é criada depois que a vaga no semáforo é obtida, então um envio
    cancelado na fila não deixa corrotina pendente.
    """

    def __init__(self, max_concurrent: int = DEFAULT_MAX_CONCURRENT_SENDS) -> None:
        if max_concurrent <= 0:
            raise ValueError("max_concurrent deve ser > 0")
        self._max_concurrent = max_concurrent
        self._semaphore = asyncio.Semaphore(max_concurrent)
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def max_concurrent(self) -> int:
        return self._max_concurrent

    @property
    def active_count(self) -> int:
        return len(self._tasks)

    def schedule(self, send: Callable[[], Awaitable[None]], *, channel: str) -> int:
        """Agenda o envio e retorna a quantidade de envios ativos."""
        task = asyncio.create_task(self._run(send))
        self._tasks.add(task)
        task.add_done_callback(functools.partial(self._on_done, channel=channel))
        logger.info(
            "relay_background_send_scheduled",
            extra={"channel": channel, "active_tasks": len(self._tasks)},
        )
        return len(self._tasks)

    async def _run(self, send: Callable[[], Awaitable[None]]) -> None:
        async with self._semaphore:
            await send()

    def _on_done(self, task: asyncio.Task[None], *, channel: str) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.warning(
                "relay_background_send_cancelled",
                extra={"channel": channel, "active_tasks": len(self._tasks)},
            )
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "relay_background_task_failed",
                extra={
                    "channel": channel,
                    "error_type": type(exc).__name__,
                    "active_tasks": len(self._tasks),
                },
            )

    async def drain(self, timeout_seconds: float = 30.0) -> None:
        """Aguarda envios pendentes durante shutdown; cancela o que sobrar."""
        if not self._tasks:
            return

        pending_now = list(self._tasks)
        logger.info(
            "relay_background_shutdown_wait",
            extra={"pending_tasks": len(pending_now), "timeout_seconds": timeout_seconds},
        )
        _, pending = await asyncio.wait(pending_now, timeout=timeout_seconds)
        if not pending:
            return

        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        logger.warning(
            "relay_background_shutdown_cancelled",
            extra={"cancelled_tasks": len(pending)},
        )
