"""Endpoints HTTP (FastAPI) en lecture seule sur la session."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from .session import Session
from .views import player_view


def create_http_app(session: Session, title: str = "Trivia Live") -> FastAPI:
    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        yield
        await session.shutdown()

    app = FastAPI(title=title, lifespan=lifespan)

    # Question courante, sans la bonne réponse
    @app.get("/api/question")
    async def get_question() -> JSONResponse:
        question = session.state.current_question()
        return JSONResponse(question.public_dict() if question else None)

    @app.get("/api/scoreboard")
    async def get_scoreboard() -> JSONResponse:
        return JSONResponse(player_view(session.state))

    @app.get("/api/health")
    async def health() -> JSONResponse:
        return JSONResponse(
            {
                "ok": True,
                "phase": session.state.phase.value,
                "players": len(session.state.players),
                "questions": len(session.state.questions),
            }
        )

    return app
