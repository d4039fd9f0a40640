"""Calcul des points attribués lors de la révélation d'une question."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from .state import Player, Question

DEFAULT_POINTS_CORRECT = 10
DEFAULT_POINTS_BUZZ_BONUS = 5


def normalize_answer(answer: Any) -> Optional[str]:
    """Réponse en majuscules, sans espaces; None si vide."""
    if answer is None:
        return None
    text = str(answer).strip().upper()
    return text or None


def compute_awards(
    question: Optional[Question],
    buzzed_by: Optional[str],
    players: Iterable[Player],
    points_correct: int = DEFAULT_POINTS_CORRECT,
    points_buzz_bonus: int = DEFAULT_POINTS_BUZZ_BONUS,
) -> Dict[str, int]:
    """Retourne {player_id: points} pour les joueurs ayant la bonne réponse.

    Le bonus de buzz ne s'ajoute que si le joueur qui a buzzé a aussi
    répondu juste. Ne modifie aucun joueur.
    """
    if question is None:
        return {}
    correct = normalize_answer(question.correct)
    if correct is None:
        return {}

    awards: Dict[str, int] = {}
    for player in players:
        if normalize_answer(player.answer) != correct:
            continue
        points = points_correct
        if player.id == buzzed_by:
            points += points_buzz_bonus
        awards[player.id] = points
    return awards


def apply_awards(players: Dict[str, Player], awards: Dict[str, int]) -> None:
    for player_id, points in awards.items():
        player = players.get(player_id)
        if player is not None:
            player.score += points
