"""Application ASGI: Socket.IO + FastAPI autour d'une session de quiz."""

from __future__ import annotations

import socketio

from .events import register_handlers
from .http import create_http_app
from .logging_config import configure_logging
from .question_loader import QuestionBank
from .session import Session
from .settings import Settings, settings
from .sockets import create_sio


def create_session(emitter: socketio.AsyncServer, config: Settings) -> Session:
    session = Session(
        emitter,
        QuestionBank(config.QUESTIONS_SOURCE),
        timer_seconds=config.TIMER_SECONDS,
        points_correct=config.POINTS_CORRECT,
        points_buzz_bonus=config.POINTS_BUZZ_BONUS,
        max_players=config.MAX_PLAYERS,
    )
    session.load_questions()
    return session


def create_app(config: Settings = settings) -> socketio.ASGIApp:
    configure_logging(config.LOG_LEVEL)
    sio = create_sio(config.cors_allowed_origins)
    session = create_session(sio, config)
    register_handlers(sio, session)
    return socketio.ASGIApp(sio, create_http_app(session, title=config.APP_NAME))


# Application ASGI combinée
app = create_app()
