from typing import Dict, Optional

PLAYER = 'player'
SPECTATOR = 'spectator'


class ConnectionRegistry:
    """Which sessions each connection is attached to, and in what role."""

    def __init__(self):
        self._by_connection: Dict[str, Dict[str, str]] = {}

    def attach(self, connection_id: str, code: str, role: str = SPECTATOR) -> None:
        roles = self._by_connection.setdefault(connection_id, {})
        # A player watching its own game stays a player
        if roles.get(code) == PLAYER:
            return
        roles[code] = role

    def detach(self, connection_id: str) -> Dict[str, str]:
        return self._by_connection.pop(connection_id, {})

    def role(self, connection_id: str, code: str) -> Optional[str]:
        return self._by_connection.get(connection_id, {}).get(code)

    def subscribers(self, code: str) -> int:
        return sum(1 for roles in self._by_connection.values() if code in roles)
