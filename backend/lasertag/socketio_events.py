from flask import current_app, request
from flask_socketio import emit

from lasertag import get_coordinator, socketio
from lasertag.services.games.commands import (
    Bomb,
    CreateGame,
    Disconnect,
    JoinGame,
    Shoot,
    StartGame,
    WatchGame,
)


def _get_sid() -> str:
    # request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _payload(data) -> dict:
    return data if isinstance(data, dict) else {}


def _game_id(data):
    # start_game/watch_game send the bare code; accept {gameID} too
    if isinstance(data, dict):
        return data.get('gameID')
    return data


def handle_connect(auth=None):
    current_app.logger.debug(f"[connect] conn={_get_sid()}")


def handle_disconnect(reason=None):
    get_coordinator().dispatch(Disconnect(connection_id=_get_sid()))


def handle_create_game(data=None):
    get_coordinator().dispatch(CreateGame(connection_id=_get_sid()))


def handle_join_game(data=None):
    data = _payload(data)
    get_coordinator().dispatch(
        JoinGame(code=data.get('gameID'), connection_id=_get_sid(), marker_id=data.get('markerId'))
    )


def handle_start_game(data=None):
    get_coordinator().dispatch(StartGame(code=_game_id(data), connection_id=_get_sid()))


def handle_watch_game(data=None):
    get_coordinator().dispatch(WatchGame(code=_game_id(data), connection_id=_get_sid()))


def handle_shoot(data=None):
    data = _payload(data)
    get_coordinator().dispatch(
        Shoot(code=data.get('gameID'), connection_id=_get_sid(), target_marker_id=data.get('targetMarkerId'))
    )


def handle_bomb(data=None):
    # The bomb always belongs to the sending connection; playerId is informational
    data = _payload(data)
    get_coordinator().dispatch(Bomb(code=data.get('gameID'), connection_id=_get_sid()))


def handle_ping(data=None):
    emit('pong', data or {})


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on the given namespace."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('create_game', handle_create_game, namespace=namespace)
    socketio.on_event('join_game', handle_join_game, namespace=namespace)
    socketio.on_event('start_game', handle_start_game, namespace=namespace)
    socketio.on_event('watch_game', handle_watch_game, namespace=namespace)
    socketio.on_event('shoot', handle_shoot, namespace=namespace)
    socketio.on_event('bomb', handle_bomb, namespace=namespace)
    socketio.on_event('ping', handle_ping, namespace=namespace)
