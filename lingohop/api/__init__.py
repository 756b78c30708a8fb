"""
API Module - HTTP interface to game sessions.

Clients:
1. Create a session
2. Select languages and move between countries
3. Read the game state after every step

All state is session-scoped and in-memory.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    SelectLanguageRequest,
    MoveRequest,
    HardModeRequest,
    # Responses
    GameStateResponse,
    MoveResponse,
    ErrorResponse,
    LanguageListResponse,
    # Shared
    LanguageInfo,
    MoveInfo,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateSessionRequest",
    "SelectLanguageRequest",
    "MoveRequest",
    "HardModeRequest",
    # Responses
    "GameStateResponse",
    "MoveResponse",
    "ErrorResponse",
    "LanguageListResponse",
    # Shared
    "LanguageInfo",
    "MoveInfo",
    # Service
    "APIService",
    "create_app",
]
