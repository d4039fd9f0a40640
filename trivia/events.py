"""Gestion des événements Socket.IO (connexion, buzz, réponses, animateur).

Chaque événement entrant est traduit en ``Command`` et confié au dispatcher
de la session; aucun handler ne modifie l'état directement.
"""

from __future__ import annotations

from typing import Any, Dict, Optional
from urllib.parse import parse_qs

import socketio

from .commands import CommandType
from .session import Session

HOST_ROLE = "host"
PLAYER_ROLE = "player"


def get_role(environ: Dict[str, Any], auth: Any = None) -> str:
    """Rôle demandé à la connexion (``?role=host`` ou ``auth={"role": "host"}``)."""
    if isinstance(auth, dict) and auth.get("role"):
        return str(auth["role"])
    query = parse_qs(environ.get("QUERY_STRING", ""))
    roles = query.get("role")
    return roles[0] if roles else PLAYER_ROLE


class SocketEvents:
    def __init__(self, session: Session) -> None:
        self.session = session

    async def connect(self, sid: str, environ: Dict[str, Any], auth: Any = None) -> None:
        role = HOST_ROLE if get_role(environ, auth) == HOST_ROLE else PLAYER_ROLE
        await self.session.command(CommandType.CONNECT, sid, role)

    async def disconnect(self, sid: str, _reason: Optional[str] = None) -> None:
        await self.session.command(CommandType.DISCONNECT, sid)

    async def join(self, sid: str, name: Any = None) -> Dict[str, Any]:
        # La valeur retournée sert d'accusé de réception côté client
        return await self.session.command(CommandType.JOIN, sid, name)

    async def buzz(self, sid: str, _data: Any = None) -> None:
        await self.session.command(CommandType.BUZZ, sid)

    async def answer(self, sid: str, answer: Any = None) -> None:
        await self.session.command(CommandType.ANSWER, sid, answer)

    async def host_command(self, command_type: CommandType, sid: str, payload: Any = None) -> None:
        await self.session.command(command_type, sid, payload)

    def register(self, sio: socketio.AsyncServer) -> None:
        sio.on("connect", self.connect)
        sio.on("disconnect", self.disconnect)
        sio.on(CommandType.JOIN.value, self.join)
        sio.on(CommandType.BUZZ.value, self.buzz)
        sio.on(CommandType.ANSWER.value, self.answer)
        for command_type in (
            CommandType.START,
            CommandType.NEXT,
            CommandType.PREV,
            CommandType.REVEAL,
            CommandType.RESET_BUZZ,
            CommandType.KICK,
            CommandType.SET_SCORE,
            CommandType.RELOAD_QUESTIONS,
        ):
            sio.on(command_type.value, self._host_handler(command_type))

    def _host_handler(self, command_type: CommandType):
        async def handler(sid: str, payload: Any = None) -> None:
            await self.host_command(command_type, sid, payload)

        return handler


def register_handlers(sio: socketio.AsyncServer, session: Session) -> SocketEvents:
    """Attache les handlers de la session au serveur Socket.IO."""
    events = SocketEvents(session)
    events.register(sio)
    return events
