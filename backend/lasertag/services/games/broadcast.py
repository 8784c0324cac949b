from dataclasses import dataclass
from typing import Any, Iterable, Optional

from lasertag.models import Session

_NO_PAYLOAD = object()


@dataclass
class Notice:
    """One outbound message. ``to`` names a single connection; None means the whole session."""

    event: str
    payload: Any = _NO_PAYLOAD
    to: Optional[str] = None

    @property
    def has_payload(self) -> bool:
        return self.payload is not _NO_PAYLOAD


def activity(text: str) -> Notice:
    return Notice('player_action', text)


def players_update(session: Session, to: Optional[str] = None) -> Notice:
    return Notice('players_update', session.player_list(), to=to)


def room_name(code: str) -> str:
    return f"game:{code}"


class SocketIOGateway:
    """Fans notices out over Socket.IO rooms, one room per game."""

    def __init__(self, socketio, namespace: str = '/'):
        self.socketio = socketio
        self.namespace = namespace

    def subscribe(self, connection_id: str, code: str) -> None:
        self.socketio.server.enter_room(connection_id, room_name(code), namespace=self.namespace)

    def publish(self, code: str, notices: Iterable[Notice]) -> None:
        for notice in notices:
            target = notice.to if notice.to is not None else room_name(code)
            if notice.has_payload:
                self.socketio.emit(notice.event, notice.payload, to=target, namespace=self.namespace)
            else:
                self.socketio.emit(notice.event, to=target, namespace=self.namespace)

    def send_error(self, connection_id: str, message: str) -> None:
        self.socketio.emit('error', message, to=connection_id, namespace=self.namespace)
