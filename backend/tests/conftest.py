import os
import sys
import random
from collections import defaultdict

import pytest

# Ensure the backend root (containing the `lasertag` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from lasertag import create_app, socketio
from lasertag.services.games import GameCoordinator, GameRules
from lasertag.services.games.broadcast import room_name
from lasertag.services.games.commands import CreateGame, JoinGame, StartGame
from lasertag.services.games.scheduler import TimerHandle


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ORIGINS = '*'
    LOG_LEVEL = 'DEBUG'
    MIN_PLAYERS = 2
    RELOAD_MS = 300
    GAME_CLOCK_INTERVAL_SEC = 0


class RecordingGateway:
    """Captures what would go out over Socket.IO, in order."""

    def __init__(self):
        self.sent = []
        self.rooms = defaultdict(set)

    def subscribe(self, connection_id, code):
        self.rooms[code].add(connection_id)

    def publish(self, code, notices):
        for notice in notices:
            target = notice.to if notice.to is not None else room_name(code)
            self.sent.append((target, notice.event, notice.payload if notice.has_payload else None))

    def send_error(self, connection_id, message):
        self.sent.append((connection_id, 'error', message))

    def events(self, event, to=None):
        return [payload for target, name, payload in self.sent if name == event and (to is None or target == to)]

    def activity(self, code):
        return self.events('player_action', to=room_name(code))

    def clear(self):
        del self.sent[:]


class ManualScheduler:
    """Holds timers until a test fires them."""

    def __init__(self):
        self.pending = []

    def call_later(self, delay, callback, *args, label=''):
        handle = TimerHandle(label)
        self.pending.append((handle, callback, args, delay))
        return handle

    def fire(self, prefix=''):
        due = [entry for entry in self.pending if entry[0].label.startswith(prefix)]
        self.pending = [entry for entry in self.pending if entry not in due]
        fired = 0
        for handle, callback, args, _ in due:
            if handle.cancelled:
                continue
            handle.fired = True
            callback(handle, *args)
            fired += 1
        return fired

    def labels(self):
        return [entry[0].label for entry in self.pending if not entry[0].cancelled]


class FakeClock:
    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture()
def gateway():
    return RecordingGateway()


@pytest.fixture()
def scheduler():
    return ManualScheduler()


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def rules():
    return GameRules(clock_interval_sec=0)


@pytest.fixture()
def coordinator(gateway, scheduler, rules, clock):
    return GameCoordinator(gateway, scheduler, rules=rules, rng=random.Random(7), now_fn=clock)


@pytest.fixture()
def lobby(coordinator):
    """A forming game with connections c0..c3 seated on markers 0..3."""
    code = coordinator.dispatch(CreateGame(connection_id='dashboard'))
    for i in range(4):
        coordinator.dispatch(JoinGame(code=code, connection_id=f'c{i}', marker_id=i))
    return code


@pytest.fixture()
def active_game(coordinator, lobby, gateway):
    coordinator.dispatch(StartGame(code=lobby, connection_id='dashboard'))
    gateway.clear()
    return lobby


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client()
    )
    yield test_client
    if test_client.is_connected():
        test_client.disconnect()


@pytest.fixture()
def make_sio_client(flask_app):
    clients = []

    def _make():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        clients.append(test_client)
        return test_client

    yield _make
    for test_client in clients:
        if test_client.is_connected():
            test_client.disconnect()
