import logging
import random
import threading
import time
from typing import Callable, Dict, Optional

from lasertag.models import Session, SessionStatus
from . import assignment, combat
from .broadcast import Notice, players_update
from .commands import (
    Bomb,
    ClockTick,
    CreateGame,
    Disconnect,
    JoinGame,
    ReloadComplete,
    Shoot,
    StartGame,
    WatchGame,
)
from .errors import GameError, NoNamesAvailable
from .registry import PLAYER, SPECTATOR, ConnectionRegistry
from .rules import GameRules
from .scheduler import TimerHandle
from .store import SessionStore


class GameCoordinator:
    """Single writer for every session in the process.

    All commands, including timer callbacks, go through ``dispatch`` one at a
    time. Notices produced by a command are published before the next command
    is handled, so subscribers see them in the order the state changed.
    """

    def __init__(self, gateway, scheduler, rules: Optional[GameRules] = None, logger=None,
                 rng: Optional[random.Random] = None, now_fn: Callable[[], float] = time.time):
        self.rules = rules or GameRules()
        self.gateway = gateway
        self.scheduler = scheduler
        self.logger = logger or logging.getLogger('lasertag')
        self.rng = rng or random.Random()
        self.now_fn = now_fn
        self.store = SessionStore(
            code_length=self.rules.code_length,
            code_retries=self.rules.code_retries,
            rng=self.rng,
            now_fn=now_fn,
        )
        self.registry = ConnectionRegistry()
        self._clocks: Dict[str, TimerHandle] = {}
        self._lock = threading.RLock()
        self._handlers = {
            CreateGame: self._create_game,
            JoinGame: self._join_game,
            StartGame: self._start_game,
            WatchGame: self._watch_game,
            Shoot: self._shoot,
            Bomb: self._bomb,
            Disconnect: self._disconnect,
            ReloadComplete: self._reload_complete,
            ClockTick: self._clock_tick,
        }

    def dispatch(self, command):
        handler = self._handlers[type(command)]
        with self._lock:
            try:
                return handler(command)
            except GameError as exc:
                connection_id = getattr(command, 'connection_id', None)
                if isinstance(exc, NoNamesAvailable):
                    self.logger.error(
                        f"[invariant] name pool exhausted game={getattr(command, 'code', None)} "
                        f"capacity={self.rules.max_players}"
                    )
                else:
                    self.logger.info(
                        f"[reject] {type(command).__name__} conn={connection_id} reason={exc.kind}"
                    )
                if connection_id is None:
                    raise
                self.gateway.send_error(connection_id, str(exc))
                return None

    # ---- Read-only views ----

    def snapshot(self, code) -> dict:
        with self._lock:
            return self.store.get(code).to_dict()

    def list_sessions(self):
        with self._lock:
            return [s.summary() for s in self.store.all()]

    # ---- Command handlers ----

    def _create_game(self, cmd: CreateGame) -> str:
        session = self.store.create()
        self.logger.info(f"[create] game={session.code} conn={cmd.connection_id}")
        if cmd.connection_id is not None:
            self._subscribe(cmd.connection_id, session.code, SPECTATOR)
            self.gateway.publish(session.code, [Notice('game_created', session.code, to=cmd.connection_id)])
        return session.code

    def _join_game(self, cmd: JoinGame):
        session = self.store.get(cmd.code)
        resolution = assignment.join(session, cmd.connection_id, cmd.marker_id, self.rules, rng=self.rng)
        if resolution.notices:
            player = resolution.result
            self._subscribe(cmd.connection_id, session.code, PLAYER)
            self.logger.info(
                f"[join] game={session.code} conn={cmd.connection_id} name={player.display_name} "
                f"marker={player.marker_id} players={len(session.players)}"
            )
            self.gateway.publish(session.code, resolution.notices)
        return resolution.result

    def _start_game(self, cmd: StartGame) -> None:
        session = self.store.get(cmd.code)
        resolution = assignment.start(session, self.rules, self.now_fn())
        self.logger.info(f"[start] game={session.code} players={len(session.players)} by={cmd.connection_id}")
        self.gateway.publish(session.code, resolution.notices)
        self._schedule_clock(session.code)

    def _watch_game(self, cmd: WatchGame) -> None:
        session = self.store.get(cmd.code)
        self._subscribe(cmd.connection_id, session.code, SPECTATOR)
        self.logger.info(f"[watch] game={session.code} conn={cmd.connection_id}")
        self.gateway.publish(session.code, [players_update(session, to=cmd.connection_id)])

    def _shoot(self, cmd: Shoot) -> None:
        session = self.store.find(cmd.code)
        if session is None:
            self.logger.debug(f"[drop] shoot game={cmd.code} conn={cmd.connection_id} reason=no-session")
            return
        resolution = combat.shoot(session, cmd.connection_id, cmd.target_marker_id, self.rules)
        if not resolution.notices:
            self.logger.debug(f"[drop] shoot game={session.code} conn={cmd.connection_id} status={session.status.value}")
            return
        self.logger.info(f"[shoot] game={session.code} conn={cmd.connection_id} target={cmd.target_marker_id}")
        self._schedule_cooldown(session, resolution.reloading)
        self._log_winner(session, resolution.notices)
        self.gateway.publish(session.code, resolution.notices)

    def _bomb(self, cmd: Bomb) -> None:
        session = self.store.find(cmd.code)
        if session is None:
            self.logger.debug(f"[drop] bomb game={cmd.code} conn={cmd.connection_id} reason=no-session")
            return
        resolution = combat.bomb(session, cmd.connection_id, self.rules)
        if not resolution.notices:
            self.logger.debug(f"[drop] bomb game={session.code} conn={cmd.connection_id} status={session.status.value}")
            return
        self.logger.info(f"[bomb] game={session.code} conn={cmd.connection_id}")
        self._log_winner(session, resolution.notices)
        self.gateway.publish(session.code, resolution.notices)

    def _disconnect(self, cmd: Disconnect) -> None:
        roles = self.registry.detach(cmd.connection_id)
        touched = set(roles)
        for session in self.store.all():
            if session.player_by_connection(cmd.connection_id) is None:
                continue
            touched.add(session.code)
            resolution = assignment.leave(session, cmd.connection_id, self.rules)
            self.logger.info(
                f"[disconnect] game={session.code} conn={cmd.connection_id} "
                f"name={resolution.result.display_name} remaining={len(session.players)}"
            )
            self._log_winner(session, resolution.notices)
            self.gateway.publish(session.code, resolution.notices)
        for code in touched:
            self._remove_if_empty(code)

    def _reload_complete(self, cmd: ReloadComplete) -> None:
        session = self.store.find(cmd.code)
        player = session.player_by_connection(cmd.connection_id) if session else None
        if player is None or player.cooldown is not cmd.handle:
            self.logger.info(f"[timer-abort] reload game={cmd.code} conn={cmd.connection_id}")
            return
        player.reloading = False
        player.cooldown = None
        self.logger.debug(f"[timer-fire] reload game={session.code} name={player.display_name}")
        self.gateway.publish(session.code, [Notice('reload_complete', to=player.connection_id)])

    def _clock_tick(self, cmd: ClockTick) -> None:
        session = self.store.find(cmd.code)
        if self._clocks.get(cmd.code) is not cmd.handle:
            return
        if session is None or session.status != SessionStatus.ACTIVE:
            self._clocks.pop(cmd.code, None)
            self.logger.debug(f"[timer-abort] clock game={cmd.code}")
            return
        elapsed = int(self.now_fn() - (session.started_at or 0))
        self.gateway.publish(session.code, [Notice('game_time', elapsed)])
        self._schedule_clock(session.code)

    # ---- Helpers ----

    def _subscribe(self, connection_id: str, code: str, role: str) -> None:
        self.registry.attach(connection_id, code, role)
        self.gateway.subscribe(connection_id, code)

    def _log_winner(self, session: Session, notices) -> None:
        if any(n.event == 'game_over' for n in notices):
            self.logger.info(f"[win] game={session.code} winner={session.winner} status={session.status.value}")

    def _schedule_cooldown(self, session: Session, player) -> None:
        if player is None:
            return
        player.cooldown = self.scheduler.call_later(
            self.rules.reload_seconds,
            self._on_reload_timer,
            session.code,
            player.connection_id,
            label=f"reload game={session.code} name={player.display_name}",
        )

    def _on_reload_timer(self, handle: TimerHandle, code: str, connection_id: str) -> None:
        self.dispatch(ReloadComplete(code=code, connection_id=connection_id, handle=handle))

    def _schedule_clock(self, code: str) -> None:
        if self.rules.clock_interval_sec <= 0:
            return
        self._clocks[code] = self.scheduler.call_later(
            self.rules.clock_interval_sec,
            self._on_clock_timer,
            code,
            label=f"clock game={code}",
        )

    def _on_clock_timer(self, handle: TimerHandle, code: str) -> None:
        self.dispatch(ClockTick(code=code, handle=handle))

    def _remove_if_empty(self, code: str) -> None:
        if not self.rules.remove_empty_sessions:
            return
        session = self.store.find(code)
        if session is None or session.players or self.registry.subscribers(code):
            return
        self.store.remove(code)
        clock = self._clocks.pop(code, None)
        if clock is not None and clock.pending:
            clock.cancel()
        self.logger.info(f"[remove] game={code} status={session.status.value}")
