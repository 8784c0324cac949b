from typing import List

from lasertag.models import Session, SessionStatus, coerce_marker_id
from .broadcast import Notice, activity, players_update
from .commands import Resolution
from .errors import (
    CannotShootSelf,
    InsufficientScore,
    PlayerEliminated,
    ShooterNotFound,
    ShooterReloading,
    TargetNotFound,
)
from .rules import GameRules


def check_winner(session: Session, rules: GameRules) -> List[Notice]:
    """Announce the last player standing, once per session."""
    alive = session.alive_players()
    if len(alive) != 1 or session.winner is not None:
        return []
    winner = alive[0]
    session.winner = winner.display_name
    if rules.end_game_on_win:
        session.status = SessionStatus.ENDED
    return [
        activity(f'{winner.display_name} wins the game!'),
        Notice('game_over', {'winner': winner.display_name}),
    ]


def shoot(session: Session, shooter_connection_id: str, target_marker_id, rules: GameRules) -> Resolution:
    """Resolve one shot.

    Shots against a session that is not active are dropped without a reply, and
    so are shots at a target that is already out. Everything else either raises
    a precondition error or lands: the shooter starts reloading, the target
    loses a life and the shooter scores.
    """
    if session.status != SessionStatus.ACTIVE:
        return Resolution()

    shooter = session.player_by_connection(shooter_connection_id)
    if shooter is None:
        raise ShooterNotFound()
    marker = coerce_marker_id(target_marker_id)
    target = session.player_by_marker(marker) if marker is not None else None
    if target is None:
        raise TargetNotFound()
    if shooter.reloading:
        raise ShooterReloading()
    if shooter is target:
        raise CannotShootSelf()
    if not shooter.alive:
        raise PlayerEliminated()

    if not target.alive:
        return Resolution()

    shooter.reloading = True
    target.lives -= 1
    shooter.score += rules.hit_score
    notices = [
        activity(f'{shooter.display_name} hit {target.display_name}'),
        activity(f'{shooter.display_name} gained {rules.hit_score} points'),
    ]
    if target.lives == 0:
        shooter.kills += 1
        notices.extend([
            Notice('eliminated', to=target.connection_id),
            activity(f'{target.display_name} was eliminated'),
            activity(f'{shooter.display_name} eliminated {target.display_name}'),
        ])

    notices.extend(check_winner(session, rules))
    notices.append(players_update(session))
    return Resolution(notices=notices, reloading=shooter)


def bomb(session: Session, actor_connection_id: str, rules: GameRules) -> Resolution:
    if session.status != SessionStatus.ACTIVE:
        return Resolution()

    actor = session.player_by_connection(actor_connection_id)
    if actor is None:
        raise ShooterNotFound()
    if not actor.alive:
        raise PlayerEliminated()
    if actor.score < rules.bomb_cost:
        raise InsufficientScore(f'The bomb costs {rules.bomb_cost} points')

    notices = []
    for victim in session.players:
        if victim is actor or not victim.alive:
            continue
        victim.lives -= rules.bomb_damage
        notices.append(activity(f"{victim.display_name} was caught in {actor.display_name}'s bomb"))
        if victim.lives <= 0:
            actor.kills += 1
            notices.extend([
                Notice('eliminated', to=victim.connection_id),
                activity(f'{victim.display_name} was eliminated'),
            ])
    actor.score -= rules.bomb_cost
    notices.append(activity(f'{actor.display_name} used a bomb!'))

    notices.extend(check_winner(session, rules))
    notices.append(players_update(session))
    return Resolution(notices=notices)
