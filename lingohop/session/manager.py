"""
Session Manager - Creates and manages game sessions.

A session is one play-through:
- Created when a player starts a game
- Owns exactly one GameEngine (no shared global engine)
- Destroyed when the player ends it

Sessions are EPHEMERAL: in-memory only, nothing is persisted.
All sessions share one read-only Repository.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import logging
import threading
import time
import uuid

from ..config import DEFAULT_RULES, GameRules
from ..data.repository import Repository
from ..engine_core.engine import GameEngine

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"  # Moves remaining
    GAME_OVER = "game_over"  # Move budget spent or no country left to play
    ENDED = "ended"  # Removed by the player or cleanup


class SessionNotFoundError(KeyError):
    """Raised when a session id is unknown or already ended."""

    def __init__(self, session_id: str):
        super().__init__(session_id)
        self.session_id = session_id

    def __str__(self):
        return f"Session {self.session_id} not found"


@dataclass
class Session:
    """
    An ephemeral game session.

    The session is destroyed when the game ends.
    State is NOT persisted.
    """
    session_id: str
    engine: GameEngine
    created_at: float
    last_active_at: float = 0.0
    ended: bool = False

    @property
    def state(self) -> SessionState:
        if self.ended:
            return SessionState.ENDED
        if self.engine.is_game_over():
            return SessionState.GAME_OVER
        return SessionState.ACTIVE

    def is_active(self) -> bool:
        """Check if session is still playable."""
        return self.state == SessionState.ACTIVE

    def touch(self):
        self.last_active_at = time.time()


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions, one engine each
    - Track active sessions
    - Clean up ended or stale sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self, repository: Repository, rules: GameRules = DEFAULT_RULES):
        self.repository = repository
        self.rules = rules
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()

    def create_session(
        self,
        hard_mode: bool = False,
        max_moves: int | None = None,
        seed: int | None = None,
    ) -> Session:
        """
        Create a new game session.

        Args:
            hard_mode: Use the lower per-language cap
            max_moves: Override the move budget
            seed: Seed for the starting country and refreshes

        Returns:
            New Session with its game already started
        """
        rules = self.rules
        if max_moves is not None:
            rules = rules.with_max_moves(max_moves)

        engine = GameEngine(self.repository, rules=rules, hard_mode=hard_mode, seed=seed)
        now = time.time()
        session = Session(
            session_id=str(uuid.uuid4()),
            engine=engine,
            created_at=now,
            last_active_at=now,
        )

        with self._lock:
            self._sessions[session.session_id] = session
        logger.info(
            "Created session %s starting in %s",
            session.session_id, engine.get_game_state().current_country.name,
        )
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        with self._lock:
            return self._sessions.get(session_id)

    def require_session(self, session_id: str) -> Session:
        """Get a session by ID, raising if it does not exist."""
        session = self.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        session.touch()
        return session

    def end_session(self, session_id: str) -> bool:
        """
        End a session and drop it from memory.

        Returns False if the session did not exist.
        """
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.ended = True
        logger.info("Ended session %s", session_id)
        return True

    def list_sessions(self) -> list[str]:
        """List IDs of all live sessions."""
        with self._lock:
            return list(self._sessions)

    def list_active_sessions(self) -> list[str]:
        """List IDs of sessions whose game is not over."""
        with self._lock:
            return [
                sid for sid, session in self._sessions.items()
                if session.is_active()
            ]

    def cleanup_stale_sessions(self, max_idle_seconds: int = 3600) -> int:
        """
        End sessions idle for longer than max_idle_seconds.

        Returns the number of sessions removed.
        """
        cutoff = time.time() - max_idle_seconds
        with self._lock:
            stale = [
                sid for sid, session in self._sessions.items()
                if session.last_active_at < cutoff
            ]
        for session_id in stale:
            self.end_session(session_id)
        return len(stale)
