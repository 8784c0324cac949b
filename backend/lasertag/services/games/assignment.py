import random
from typing import Optional

from lasertag.models import Player, Session, SessionStatus, coerce_marker_id
from .broadcast import Notice, activity, players_update
from .combat import check_winner
from .commands import Resolution
from .errors import (
    InvalidMarkerId,
    MarkerIdInUse,
    NoNamesAvailable,
    NotEnoughPlayers,
    SessionAlreadyStarted,
    SessionFull,
)
from .rules import GameRules

# Must hold at least as many names as a session has seats
NAME_POOL = (
    'Viper',
    'Ghost',
    'Blaze',
    'Raven',
    'Nova',
    'Falcon',
    'Shadow',
    'Titan',
    'Comet',
    'Phoenix',
)


def parse_marker_id(value, marker_id_max: int) -> int:
    marker = coerce_marker_id(value)
    if marker is None:
        raise InvalidMarkerId()
    if not 0 <= marker <= marker_id_max:
        raise InvalidMarkerId(f'Marker ID must be between 0 and {marker_id_max}')
    return marker


def join(session: Session, connection_id: str, marker_id, rules: GameRules,
         rng: Optional[random.Random] = None) -> Resolution:
    """Seat a connection in a forming session.

    Checks run in a fixed order and the first failure wins. A connection that is
    already seated gets its existing player back and nothing is broadcast.
    """
    if session.status != SessionStatus.FORMING:
        raise SessionAlreadyStarted()
    if len(session.players) >= rules.max_players:
        raise SessionFull()

    existing = session.player_by_connection(connection_id)
    if existing is not None:
        return Resolution(result=existing)

    marker = parse_marker_id(marker_id, rules.marker_id_max)
    if session.player_by_marker(marker) is not None:
        raise MarkerIdInUse(f'Marker ID {marker} is already in use')

    free_names = [name for name in NAME_POOL if name not in session.assigned_names]
    if not free_names:
        raise NoNamesAvailable()
    name = (rng or random).choice(free_names)

    player = Player(
        connection_id=connection_id,
        display_name=name,
        marker_id=marker,
        lives=rules.starting_lives,
    )
    session.players.append(player)
    session.assigned_names.add(name)

    return Resolution(
        notices=[
            Notice('joined_successfully', {'name': name, 'markerId': marker}, to=connection_id),
            players_update(session),
            activity(f'{name} joined the game'),
        ],
        result=player,
    )


def start(session: Session, rules: GameRules, now: float) -> Resolution:
    if session.status != SessionStatus.FORMING:
        raise SessionAlreadyStarted()
    if len(session.players) < rules.min_players:
        raise NotEnoughPlayers(f'At least {rules.min_players} players are required to start')

    session.status = SessionStatus.ACTIVE
    session.started_at = now
    return Resolution(notices=[Notice('game_started'), activity('Game started!')])


def leave(session: Session, connection_id: str, rules: GameRules) -> Resolution:
    """Drop a disconnected player; its identity and stats are gone for good."""
    player = session.player_by_connection(connection_id)
    if player is None:
        return Resolution()

    if player.cooldown is not None:
        player.cooldown.cancel()
        player.cooldown = None
    session.players.remove(player)
    session.assigned_names.discard(player.display_name)

    notices = [players_update(session), activity(f'{player.display_name} left the game')]
    alive = session.alive_players()
    if session.status == SessionStatus.ACTIVE and len(alive) == 1:
        notices.extend(check_winner(session, rules))
    elif session.status != SessionStatus.FORMING and not alive and player.alive:
        # The last player with lives just left, even if a winner was already called
        notices.append(activity('Game ended'))
        if rules.end_game_on_win:
            session.status = SessionStatus.ENDED
    return Resolution(notices=notices, result=player)
