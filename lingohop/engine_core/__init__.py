"""
Engine Core - Move resolution, scoring and game state.

The engine is the runtime that:
1. Owns a GameState for one game
2. Validates language selections and moves
3. Scores moves by rarity and streak length
4. Refreshes the position when no moves are left from it
5. Notifies observers after every committed change
"""

from .models import Language, Country, GameMove, canonical_key
from .state import GameState
from .result import MoveResult, Advisory, FailureReason
from .observer import GameObserver, CallbackObserver
from .engine import GameEngine

__all__ = [
    "Language",
    "Country",
    "GameMove",
    "canonical_key",
    "GameState",
    "MoveResult",
    "Advisory",
    "FailureReason",
    "GameObserver",
    "CallbackObserver",
    "GameEngine",
]
