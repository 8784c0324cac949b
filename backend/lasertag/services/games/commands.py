"""Inbound actions as explicit command objects.

Each command carries everything its resolver needs; the coordinator routes
it by type through a single serialized dispatch path.
"""
from dataclasses import dataclass, field
from typing import Any, List, Optional

from lasertag.models import Player
from .broadcast import Notice
from .scheduler import TimerHandle


@dataclass
class CreateGame:
    connection_id: Optional[str] = None


@dataclass
class JoinGame:
    code: Any
    connection_id: str
    marker_id: Any


@dataclass
class StartGame:
    code: Any
    connection_id: Optional[str] = None


@dataclass
class WatchGame:
    code: Any
    connection_id: str


@dataclass
class Shoot:
    code: Any
    connection_id: str
    target_marker_id: Any


@dataclass
class Bomb:
    code: Any
    connection_id: str


@dataclass
class Disconnect:
    connection_id: str


@dataclass
class ReloadComplete:
    code: str
    connection_id: str
    handle: TimerHandle


@dataclass
class ClockTick:
    code: str
    handle: TimerHandle


@dataclass
class Resolution:
    """What a resolver did: notices to publish, in order, plus follow-up work."""

    notices: List[Notice] = field(default_factory=list)
    # Player whose cooldown must be scheduled
    reloading: Optional[Player] = None
    result: Any = None
