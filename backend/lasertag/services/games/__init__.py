"""Game domain services: sessions, seating, combat and timers.

This package contains pure(ish) domain logic that is driven by the socket
handlers and HTTP routes through a single coordinator, keeping transport
concerns separated from core game mechanics.
"""
from .coordinator import GameCoordinator
from .rules import GameRules

__all__ = ['GameCoordinator', 'GameRules']
