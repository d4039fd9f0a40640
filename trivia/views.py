"""Projections de l'état: vue joueurs (publique) et vue animateur."""

from __future__ import annotations

from typing import Any, Dict

from .state import GameState


def player_view(state: GameState) -> Dict[str, Any]:
    # Ni réponses ni bonne réponse ici
    players = [
        {
            "id": p.id,
            "name": p.name,
            "score": p.score,
            "hasBuzzed": p.has_buzzed,
        }
        for p in state.players.values()
    ]
    return {
        "phase": state.phase.value,
        "players": players,
        "qIndex": state.q_index,
        "buzzedBy": state.buzzed_by,
        "questionCount": len(state.questions),
        "timerRemaining": state.timer_remaining,
    }


def host_view(state: GameState) -> Dict[str, Any]:
    question = state.current_question()
    view = player_view(state)
    view.update(
        {
            "currentQuestion": question.to_dict() if question else None,
            "playerAnswers": [
                {
                    "id": p.id,
                    "name": p.name,
                    "answer": p.answer,
                    "connected": p.connected,
                }
                for p in state.players.values()
            ],
            "hostId": state.host_id,
        }
    )
    return view
