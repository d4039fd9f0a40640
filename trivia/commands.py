"""Commandes entrantes traitées par le dispatcher de la session."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class CommandType(str, Enum):
    # Connexions
    CONNECT = "connect"
    DISCONNECT = "disconnect"

    # Joueurs
    JOIN = "player:join"
    BUZZ = "player:buzz"
    ANSWER = "player:answer"

    # Animateur
    START = "host:start"
    NEXT = "host:next"
    PREV = "host:prev"
    REVEAL = "host:reveal"
    RESET_BUZZ = "host:resetBuzz"
    KICK = "host:kick"
    SET_SCORE = "host:setScore"
    RELOAD_QUESTIONS = "host:reloadQuestions"

    # Interne (minuteur)
    TIMER_TICK = "timer:tick"


HOST_COMMANDS = frozenset(
    {
        CommandType.START,
        CommandType.NEXT,
        CommandType.PREV,
        CommandType.REVEAL,
        CommandType.RESET_BUZZ,
        CommandType.KICK,
        CommandType.SET_SCORE,
        CommandType.RELOAD_QUESTIONS,
    }
)

TIMER_SENDER = "__timer__"


@dataclass(frozen=True)
class Command:
    type: CommandType
    sender: Optional[str] = None
    payload: Any = None
