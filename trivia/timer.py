"""Minuteur de question (start/stop) piloté par la session."""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Optional

from .commands import Command, CommandType, TIMER_SENDER

Dispatch = Callable[[Command], Awaitable[Any]]


class RoundTimer:
    """Compte à rebours d'une question.

    Le minuteur ne touche pas à l'état: chaque seconde il envoie une commande
    ``TIMER_TICK`` au dispatcher de la session, qui décrémente, diffuse et
    déclenche la révélation à zéro.
    """

    def __init__(self, dispatch: Dispatch, interval: float = 1.0) -> None:
        self._dispatch = dispatch
        self.interval = interval
        self._task: Optional[asyncio.Task[Any]] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        await self.stop()
        self._task = asyncio.create_task(self._loop())

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None or task.done():
            return
        if task is asyncio.current_task():
            # Arrêt depuis un tick: la boucle sortira d'elle-même
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _loop(self) -> None:
        me = asyncio.current_task()
        while self._task is me:
            await asyncio.sleep(self.interval)
            if self._task is not me:
                break
            try:
                await self._dispatch(Command(CommandType.TIMER_TICK, sender=TIMER_SENDER))
            except Exception:
                # Déjà journalisé par le dispatcher; le décompte continue
                continue
