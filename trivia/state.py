"""Etat applicatif centralisé de la partie de quiz."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

DEFAULT_PLAYER_NAME = "Player"
MAX_NAME_LENGTH = 20


class Phase(str, Enum):
    LOBBY = "lobby"
    QUESTION = "question"
    REVEAL = "reveal"
    ENDED = "ended"


def clean_name(name: Any) -> str:
    text = "" if name is None else str(name).strip()
    return text[:MAX_NAME_LENGTH] or DEFAULT_PLAYER_NAME


@dataclass
class Player:
    id: str
    name: str = DEFAULT_PLAYER_NAME
    score: int = 0
    answer: Optional[str] = None
    has_buzzed: bool = False
    connected: bool = True

    def reset_round(self) -> None:
        self.answer = None
        self.has_buzzed = False

    def public_dict(self) -> Dict[str, Any]:
        """Champs visibles par les joueurs (jamais la réponse)."""
        return {
            "id": self.id,
            "name": self.name,
            "score": self.score,
            "hasBuzzed": self.has_buzzed,
            "connected": self.connected,
        }


@dataclass(frozen=True)
class Question:
    question: str
    options: Dict[str, str]
    correct: str

    def public_dict(self) -> Dict[str, Any]:
        """Version sans la clé de la bonne réponse (côté joueurs)."""
        return {"question": self.question, "options": dict(self.options)}

    def to_dict(self) -> Dict[str, Any]:
        data = self.public_dict()
        data["correct"] = self.correct
        return data


@dataclass
class GameState:
    phase: Phase = Phase.LOBBY
    questions: List[Question] = field(default_factory=list)
    q_index: int = 0
    # id de connexion -> joueur
    players: Dict[str, Player] = field(default_factory=dict)
    host_id: Optional[str] = None
    buzzed_by: Optional[str] = None
    timer_remaining: int = 0
    max_players: int = 6

    # Lecture

    def current_question(self) -> Optional[Question]:
        if self.questions and 0 <= self.q_index < len(self.questions):
            return self.questions[self.q_index]
        return None

    @property
    def last_index(self) -> int:
        return len(self.questions) - 1

    def is_full(self) -> bool:
        # Les joueurs déconnectés (non exclus) occupent toujours une place
        return len(self.players) >= self.max_players

    # Mutations

    def add_player(self, player_id: str, name: Any) -> Player:
        player = Player(id=player_id, name=clean_name(name))
        self.players[player_id] = player
        return player

    def remove_player(self, player_id: str) -> Optional[Player]:
        player = self.players.pop(player_id, None)
        if player is not None and self.buzzed_by == player_id:
            self.buzzed_by = None
        return player

    def mark_disconnected(self, player_id: str) -> Optional[Player]:
        player = self.players.get(player_id)
        if player is not None:
            player.connected = False
        return player

    def clear_buzz(self) -> None:
        self.buzzed_by = None
        for player in self.players.values():
            player.has_buzzed = False

    def set_buzz_owner(self, player_id: str) -> Player:
        player = self.players[player_id]
        self.buzzed_by = player_id
        player.has_buzzed = True
        return player

    def reset_round(self) -> None:
        self.buzzed_by = None
        for player in self.players.values():
            player.reset_round()

    def begin_round(self, index: int) -> None:
        self.q_index = index
        self.reset_round()
        self.phase = Phase.QUESTION

    def set_phase(self, phase: Phase) -> None:
        self.phase = phase
