"""Session de quiz: dispatcher unique et contrôle des manches.

Toutes les commandes (joueurs, animateur, ticks du minuteur) passent par
``Session.dispatch``, qui les traite une par une: une commande termine ses
mutations et ses diffusions avant que la suivante ne commence.
"""

from __future__ import annotations

import asyncio
import logging
import math
from typing import Any, Awaitable, Callable, Dict, List, Optional, Protocol

from .broadcast import Broadcaster, Emitter
from .buzz import try_lock_buzz
from .commands import Command, CommandType, HOST_COMMANDS
from .scoring import (
    DEFAULT_POINTS_BUZZ_BONUS,
    DEFAULT_POINTS_CORRECT,
    apply_awards,
    compute_awards,
    normalize_answer,
)
from .state import GameState, Phase, Question, clean_name
from .timer import RoundTimer

logger = logging.getLogger(__name__)

Handler = Callable[[Command], Awaitable[Any]]


class QuestionProvider(Protocol):
    def load(self) -> List[Question]:
        ...


def coerce_score(value: Any) -> int:
    """Score numérique; toute valeur non numérique devient 0."""
    if isinstance(value, bool):
        return int(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if math.isnan(number) or math.isinf(number):
        return 0
    return int(number)


class Session:
    def __init__(
        self,
        emitter: Emitter,
        provider: QuestionProvider,
        timer_seconds: int = 20,
        points_correct: int = DEFAULT_POINTS_CORRECT,
        points_buzz_bonus: int = DEFAULT_POINTS_BUZZ_BONUS,
        max_players: int = 6,
        tick_interval: float = 1.0,
    ) -> None:
        self.state = GameState(max_players=max_players)
        self.broadcaster = Broadcaster(emitter)
        self.provider = provider
        self.timer_seconds = timer_seconds
        self.points_correct = points_correct
        self.points_buzz_bonus = points_buzz_bonus
        self.timer = RoundTimer(self.dispatch, interval=tick_interval)
        self._lock = asyncio.Lock()
        self._handlers: Dict[CommandType, Handler] = {
            CommandType.CONNECT: self._on_connect,
            CommandType.DISCONNECT: self._on_disconnect,
            CommandType.JOIN: self._on_join,
            CommandType.BUZZ: self._on_buzz,
            CommandType.ANSWER: self._on_answer,
            CommandType.START: self._on_start,
            CommandType.NEXT: self._on_next,
            CommandType.PREV: self._on_prev,
            CommandType.REVEAL: self._on_reveal,
            CommandType.RESET_BUZZ: self._on_reset_buzz,
            CommandType.KICK: self._on_kick,
            CommandType.SET_SCORE: self._on_set_score,
            CommandType.RELOAD_QUESTIONS: self._on_reload_questions,
            CommandType.TIMER_TICK: self._on_timer_tick,
        }

    def load_questions(self) -> None:
        self.state.questions = self.provider.load()

    async def dispatch(self, command: Command) -> Any:
        """Point d'entrée unique de toutes les mutations de l'état."""
        async with self._lock:
            if command.type in HOST_COMMANDS and (
                command.sender is None or command.sender != self.state.host_id
            ):
                logger.debug("Commande %s ignorée: %s n'est pas l'animateur", command.type.value, command.sender)
                return None
            handler = self._handlers[command.type]
            try:
                return await handler(command)
            except Exception:
                logger.exception("Erreur pendant le traitement de %s", command.type.value)
                raise

    def command(self, command_type: CommandType, sender: Optional[str] = None, payload: Any = None) -> Awaitable[Any]:
        return self.dispatch(Command(command_type, sender=sender, payload=payload))

    async def shutdown(self) -> None:
        await self.timer.stop()

    # Minuteur

    async def _start_timer(self) -> None:
        await self.timer.stop()
        self.state.timer_remaining = self.timer_seconds
        await self.broadcaster.timer_tick(self.state.timer_remaining)
        await self.timer.start()

    async def _on_timer_tick(self, _command: Command) -> None:
        if self.state.phase != Phase.QUESTION:
            await self.timer.stop()
            return
        self.state.timer_remaining = max(0, self.state.timer_remaining - 1)
        await self.broadcaster.timer_tick(self.state.timer_remaining)
        if self.state.timer_remaining > 0:
            return
        logger.info("Temps écoulé pour la question %d", self.state.q_index)
        await self._reveal()
        await self.broadcaster.timer_ended()

    # Connexions

    async def _on_connect(self, command: Command) -> None:
        sid = command.sender
        if command.payload == "host":
            self.state.host_id = sid
            logger.info("Animateur connecté: %s", sid)
            await self.broadcaster.host_connected(sid)
            await self.broadcaster.state(self.state)
        else:
            logger.info("Client connecté: %s", sid)
            await self.broadcaster.send_current_state(self.state, sid)

    async def _on_disconnect(self, command: Command) -> None:
        sid = command.sender
        if sid == self.state.host_id:
            logger.info("Animateur déconnecté")
            self.state.host_id = None
        elif self.state.mark_disconnected(sid) is not None:
            # Le joueur reste au tableau des scores; l'animateur peut l'exclure
            logger.info("Joueur déconnecté: %s", sid)
        else:
            return
        await self.broadcaster.state(self.state)

    # Joueurs

    async def _on_join(self, command: Command) -> Dict[str, Any]:
        sid = command.sender
        existing = self.state.players.get(sid)
        if existing is None and self.state.is_full():
            return {"ok": False, "error": f"Game is full ({self.state.max_players} players)."}
        if existing is not None:
            # Nouvelle demande depuis la même connexion: simple renommage
            existing.name = clean_name(command.payload)
            existing.connected = True
            player = existing
        else:
            player = self.state.add_player(sid, command.payload)
        logger.info("Joueur %s a rejoint la partie (%s)", player.name, sid)
        await self.broadcaster.state(self.state)
        return {"ok": True, "player": player.public_dict()}

    async def _on_buzz(self, command: Command) -> None:
        player = try_lock_buzz(self.state, command.sender)
        if player is None:
            return
        logger.info("Buzz verrouillé par %s", player.name)
        await self.broadcaster.buzz_locked(player)
        await self.broadcaster.state(self.state)

    async def _on_answer(self, command: Command) -> None:
        if self.state.phase != Phase.QUESTION:
            return
        player = self.state.players.get(command.sender)
        if player is None:
            return
        player.answer = normalize_answer(command.payload)
        await self.broadcaster.answer_update(self.state, player)
        await self.broadcaster.state(self.state)

    # Animateur

    async def _begin_round(self, index: int) -> None:
        self.state.begin_round(index)
        logger.info("Question %d/%d", index + 1, len(self.state.questions))
        await self._start_timer()
        await self.broadcaster.state(self.state)

    async def _on_start(self, _command: Command) -> None:
        await self._begin_round(0)

    async def _on_next(self, _command: Command) -> None:
        # Avant "start", aucune question n'est ouverte
        if self.state.phase == Phase.LOBBY:
            return
        if self.state.q_index < self.state.last_index:
            await self._begin_round(self.state.q_index + 1)
            return
        await self.timer.stop()
        self.state.set_phase(Phase.ENDED)
        logger.info("Partie terminée")
        await self.broadcaster.state(self.state)

    async def _on_prev(self, _command: Command) -> None:
        if self.state.phase != Phase.LOBBY and self.state.q_index > 0:
            await self._begin_round(self.state.q_index - 1)

    async def _on_reveal(self, _command: Command) -> None:
        # Une seule révélation (et un seul calcul des points) par manche
        if self.state.phase != Phase.QUESTION:
            return
        await self._reveal()

    async def _reveal(self) -> None:
        await self.timer.stop()
        self.state.set_phase(Phase.REVEAL)
        awards = compute_awards(
            self.state.current_question(),
            self.state.buzzed_by,
            self.state.players.values(),
            points_correct=self.points_correct,
            points_buzz_bonus=self.points_buzz_bonus,
        )
        apply_awards(self.state.players, awards)
        logger.info("Révélation de la question %d, points: %s", self.state.q_index, awards)
        await self.broadcaster.state(self.state)

    async def _on_reset_buzz(self, _command: Command) -> None:
        self.state.clear_buzz()
        await self.broadcaster.buzz_reset()
        await self.broadcaster.state(self.state)

    async def _on_kick(self, command: Command) -> None:
        player_id = command.payload
        if not isinstance(player_id, str):
            return
        player = self.state.remove_player(player_id)
        if player is None:
            return
        logger.info("Joueur %s exclu", player.name)
        await self.broadcaster.state(self.state)

    async def _on_set_score(self, command: Command) -> None:
        payload = command.payload if isinstance(command.payload, dict) else {}
        player_id = payload.get("playerId")
        player = self.state.players.get(player_id) if isinstance(player_id, str) else None
        if player is None:
            return
        player.score = coerce_score(payload.get("score"))
        await self.broadcaster.state(self.state)

    async def _on_reload_questions(self, _command: Command) -> None:
        self.load_questions()
        await self.broadcaster.state(self.state)
