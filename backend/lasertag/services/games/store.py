import random
import time
from typing import Callable, Dict, List, Optional

from lasertag.models import Session, generate_game_code
from .errors import CodeGenerationFailed, SessionNotFound


def normalize_code(code) -> Optional[str]:
    if not isinstance(code, str):
        return None
    code = code.strip().upper()
    return code or None


class SessionStore:
    """Process-wide index from game code to Session."""

    def __init__(self, code_length: int = 6, code_retries: int = 100, rng: Optional[random.Random] = None,
                 now_fn: Callable[[], float] = time.time):
        self.code_length = code_length
        self.code_retries = code_retries
        self.rng = rng or random.Random()
        self.now_fn = now_fn
        self._sessions: Dict[str, Session] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self) -> Session:
        for _ in range(self.code_retries):
            code = generate_game_code(self.code_length, rng=self.rng)
            if code not in self._sessions:
                session = Session(code=code, created_at=self.now_fn())
                self._sessions[code] = session
                return session
        raise CodeGenerationFailed()

    def find(self, code) -> Optional[Session]:
        key = normalize_code(code)
        if key is None:
            return None
        return self._sessions.get(key)

    def get(self, code) -> Session:
        session = self.find(code)
        if session is None:
            raise SessionNotFound()
        return session

    def remove(self, code) -> Optional[Session]:
        key = normalize_code(code)
        if key is None:
            return None
        return self._sessions.pop(key, None)

    def all(self) -> List[Session]:
        return list(self._sessions.values())
