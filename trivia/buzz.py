"""Arbitrage du buzzer: un seul gagnant par question."""

from __future__ import annotations

from typing import Optional

from .state import GameState, Phase, Player


def try_lock_buzz(state: GameState, player_id: str) -> Optional[Player]:
    """Attribue le buzz au premier joueur qui le demande.

    Retourne le gagnant, ou None si la demande est ignorée (hors phase
    question, buzz déjà pris, joueur inconnu). L'ordre d'arrivée dans le
    dispatcher fait foi.
    """
    if state.phase != Phase.QUESTION:
        return None
    if state.buzzed_by:
        return None
    if player_id not in state.players:
        return None
    return state.set_buzz_owner(player_id)
