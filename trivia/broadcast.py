"""Diffusion Socket.IO des vues et des événements de partie."""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

from .state import GameState, Player
from .views import host_view, player_view

logger = logging.getLogger(__name__)


class Emitter(Protocol):
    async def emit(self, event: str, data: Any = None, to: Optional[str] = None, **kwargs: Any) -> None:
        ...


class Broadcaster:
    """Pousse les vues recalculées vers les clients.

    ``emitter`` est le ``socketio.AsyncServer``; tout objet exposant la même
    coroutine ``emit`` convient (tests).
    """

    def __init__(self, emitter: Emitter) -> None:
        self.emitter = emitter

    async def state(self, state: GameState) -> None:
        await self.emitter.emit("state:update", player_view(state))
        # Pas d'animateur connecté: rien n'est mis en attente
        if state.host_id:
            await self.emitter.emit("host:update", host_view(state), to=state.host_id)

    async def send_current_state(self, state: GameState, to_sid: str) -> None:
        if to_sid == state.host_id:
            await self.emitter.emit("host:update", host_view(state), to=to_sid)
        else:
            await self.emitter.emit("state:update", player_view(state), to=to_sid)
        await self.emitter.emit("timer:tick", state.timer_remaining, to=to_sid)

    async def host_connected(self, host_id: str) -> None:
        await self.emitter.emit("host:connected", {"ok": True}, to=host_id)

    async def buzz_locked(self, player: Player) -> None:
        await self.emitter.emit("buzz:locked", {"playerId": player.id, "name": player.name})

    async def buzz_reset(self) -> None:
        await self.emitter.emit("buzz:reset")

    async def answer_update(self, state: GameState, player: Player) -> None:
        if not state.host_id:
            return
        await self.emitter.emit(
            "host:answerUpdate",
            {"id": player.id, "name": player.name, "answer": player.answer},
            to=state.host_id,
        )

    async def timer_tick(self, remaining: int) -> None:
        await self.emitter.emit("timer:tick", remaining)

    async def timer_ended(self) -> None:
        await self.emitter.emit("timer:ended")
