"""
Session Module - Manages ephemeral game sessions.

A session represents one play-through of a game and owns its own
engine. Sessions live in memory only and end when the player quits
or when they go stale.
"""

from .manager import SessionManager, Session, SessionState, SessionNotFoundError

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
    "SessionNotFoundError",
]
