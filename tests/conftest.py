import asyncio
from typing import Any, List, Optional, Tuple

import pytest
import pytest_asyncio

from trivia.commands import CommandType
from trivia.session import Session
from trivia.state import Question


# ---------------------------------------------------------------------------
# Doubles
# ---------------------------------------------------------------------------

class RecordingEmitter:
    """Remplace socketio.AsyncServer: enregistre chaque emit."""

    def __init__(self) -> None:
        self.events: List[Tuple[str, Any, Optional[str]]] = []

    async def emit(self, event: str, data: Any = None, to: Optional[str] = None, **kwargs: Any) -> None:
        self.events.append((event, data, to))

    def named(self, event: str) -> List[Tuple[str, Any, Optional[str]]]:
        return [e for e in self.events if e[0] == event]

    def names(self) -> List[str]:
        return [e[0] for e in self.events]

    def last(self, event: str) -> Any:
        matching = self.named(event)
        return matching[-1][1] if matching else None

    def clear(self) -> None:
        self.events.clear()


class StaticProvider:
    def __init__(self, questions: Optional[List[Question]] = None) -> None:
        self.questions = list(questions or [])
        self.calls = 0

    def load(self) -> List[Question]:
        self.calls += 1
        return list(self.questions)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def make_questions(count: int = 3, correct: str = "B") -> List[Question]:
    return [
        Question(
            question=f"Question {i + 1}?",
            options={"A": "un", "B": "deux", "C": "trois", "D": "quatre"},
            correct=correct,
        )
        for i in range(count)
    ]


async def connect_host(session: Session, sid: str = "host") -> None:
    await session.command(CommandType.CONNECT, sid, "host")


async def join(session: Session, sid: str, name: str) -> Any:
    await session.command(CommandType.CONNECT, sid, "player")
    return await session.command(CommandType.JOIN, sid, name)


async def wait_for(predicate, timeout: float = 2.0) -> None:
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not reached in time")
        await asyncio.sleep(0.005)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def emitter():
    return RecordingEmitter()


@pytest.fixture()
def provider():
    return StaticProvider(make_questions())


@pytest_asyncio.fixture()
async def session(emitter, provider):
    # Intervalle long: le minuteur ne se déclenche pas pendant ces tests
    s = Session(emitter, provider, timer_seconds=20, tick_interval=60)
    s.load_questions()
    yield s
    await s.shutdown()


@pytest_asyncio.fixture()
async def fast_session(emitter, provider):
    s = Session(emitter, provider, timer_seconds=3, tick_interval=0.01)
    s.load_questions()
    yield s
    await s.shutdown()
