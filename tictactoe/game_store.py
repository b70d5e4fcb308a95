"""In-memory registry of active game sessions."""

from __future__ import annotations

import itertools
import logging
import threading

from tictactoe.api.models import Symbol
from tictactoe.errors import SessionNotFoundError
from tictactoe.session import GameSession

logger = logging.getLogger(__name__)

DEFAULT_ID_PREFIX = "game"


class SessionRegistry:
    """Thread-safe map of session id -> GameSession.

    The registry lock guards id allocation and the map only. It is always
    released before a caller takes a session's lock.
    """

    def __init__(self, *, id_prefix: str = DEFAULT_ID_PREFIX) -> None:
        self._id_prefix = id_prefix
        self._sessions: dict[str, GameSession] = {}
        self._counter = itertools.count(1)
        self._lock = threading.Lock()

    def create_session(self, creator_id: str) -> tuple[str, Symbol]:
        with self._lock:
            game_id = self._next_id()
            self._sessions[game_id] = GameSession(game_id=game_id, creator_id=creator_id)
        logger.info("game created game_id=%s creator_id=%s", game_id, creator_id)
        return game_id, Symbol.x

    def get_session(self, game_id: str) -> GameSession:
        with self._lock:
            session = self._sessions.get(game_id)
        if session is None:
            raise SessionNotFoundError(game_id)
        return session

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, game_id: object) -> bool:
        with self._lock:
            return game_id in self._sessions

    def _next_id(self) -> str:
        # Caller holds self._lock.
        return f"{self._id_prefix}-{next(self._counter)}"
