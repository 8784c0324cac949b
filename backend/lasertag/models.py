from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Set
import re
import string
import random

# Optionally signed ASCII decimal
_MARKER_TEXT = re.compile(r"[+-]?[0-9]+")


class SessionStatus(str, Enum):
    FORMING = 'Forming'
    ACTIVE = 'Active'
    ENDED = 'Ended'


@dataclass
class Player:
    connection_id: str
    display_name: str
    marker_id: int
    lives: int = 5
    kills: int = 0
    score: int = 0
    reloading: bool = False
    # Pending reload timer; owned by this player's cooldown slot
    cooldown: Optional[object] = field(default=None, repr=False, compare=False)

    @property
    def alive(self) -> bool:
        return self.lives > 0

    def to_dict(self):
        return {
            'id': self.connection_id,
            'name': self.display_name,
            'markerId': self.marker_id,
            'lives': self.lives,
            'kills': self.kills,
            'score': self.score,
            'reloading': self.reloading,
        }


def coerce_marker_id(value) -> Optional[int]:
    """Read a client-supplied marker id as an int, or None if it is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if not _MARKER_TEXT.fullmatch(text):
            return None
        return int(text)
    return None


def generate_game_code(length=6, rng=None):
    """Generate a short, human-shareable game code."""
    rng = rng or random
    return ''.join(rng.choices(string.ascii_uppercase + string.digits, k=length))


@dataclass
class Session:
    code: str
    status: SessionStatus = SessionStatus.FORMING
    players: List[Player] = field(default_factory=list)
    assigned_names: Set[str] = field(default_factory=set)
    created_at: float = 0.0
    started_at: Optional[float] = None
    winner: Optional[str] = None

    def player_by_connection(self, connection_id: str) -> Optional[Player]:
        return next((p for p in self.players if p.connection_id == connection_id), None)

    def player_by_marker(self, marker_id: int) -> Optional[Player]:
        return next((p for p in self.players if p.marker_id == marker_id), None)

    def alive_players(self) -> List[Player]:
        return [p for p in self.players if p.alive]

    def player_list(self):
        return [p.to_dict() for p in self.players]

    def summary(self):
        return {
            'game_code': self.code,
            'status': self.status.value,
            'player_count': len(self.players),
            'alive_count': len(self.alive_players()),
            'winner': self.winner,
        }

    def to_dict(self):
        data = self.summary()
        data.update({
            'players': self.player_list(),
            'created_at': self.created_at,
            'started_at': self.started_at,
        })
        return data
