"""
Move results - the outcome of every language selection and move attempt.

Results are values, not exceptions: an illegal move is reported
through a failed result and leaves the game state untouched.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from .models import GameMove


class Advisory(Enum):
    """Bookkeeping notes attached to a successful move."""
    GAME_COMPLETE = "game_complete"
    LANGUAGE_EXHAUSTED = "language_exhausted"
    COUNTRY_REFRESHED = "country_refreshed"
    NO_COUNTRIES_LEFT = "no_countries_left"


class FailureReason(Enum):
    """Why a move or selection was refused."""
    GAME_OVER = "game_over"
    COUNTRY_NOT_FOUND = "country_not_found"
    COUNTRY_ALREADY_USED = "country_already_used"
    NO_LANGUAGE_SELECTED = "no_language_selected"
    LANGUAGE_NOT_SPOKEN = "language_not_spoken"
    LANGUAGE_NOT_FOUND = "language_not_found"
    LANGUAGE_LIMIT_REACHED = "language_limit_reached"


@dataclass(frozen=True)
class MoveResult:
    """
    Result of a move or language selection.

    Contains:
    - Whether it succeeded
    - A human-readable message
    - The recorded move (absent when no state changed)
    - Advisory tags for post-move bookkeeping
    """
    success: bool
    message: str
    move: GameMove | None = None
    language_overused: bool = False
    reason: FailureReason | None = None
    advisories: tuple[Advisory, ...] = ()

    @classmethod
    def failure(
        cls,
        message: str,
        reason: FailureReason | None = None,
        language_overused: bool = False,
    ) -> MoveResult:
        """Create a failure result."""
        return cls(
            success=False,
            message=message,
            reason=reason,
            language_overused=language_overused,
        )

    @classmethod
    def moved(
        cls,
        move: GameMove,
        lines: list[str],
        advisories: list[Advisory] | None = None,
    ) -> MoveResult:
        """Create a success result for a committed move."""
        return cls(
            success=True,
            message="\n".join(lines),
            move=move,
            advisories=tuple(advisories or ()),
        )

    @classmethod
    def selected(cls, message: str) -> MoveResult:
        """Create a success result for an accepted language selection."""
        return cls(success=True, message=message)

    def has_advisory(self, advisory: Advisory) -> bool:
        return advisory in self.advisories

