"""
Game configuration - tunable rules live here so business logic stays fixed.

Usage:
    from lingohop.config import GameRules, DEFAULT_RULES
"""

from __future__ import annotations
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class GameRules:
    """
    Balance parameters for one game.

    Attributes:
        max_moves:            Scored moves allowed per game.
        normal_language_cap:  Uses allowed per language in normal mode.
        hard_language_cap:    Uses allowed per language in hard mode.
    """
    max_moves: int = 30
    normal_language_cap: int = 7
    hard_language_cap: int = 4

    def language_cap(self, hard_mode: bool) -> int:
        """Usage cap for the given mode."""
        return self.hard_language_cap if hard_mode else self.normal_language_cap

    def with_max_moves(self, max_moves: int) -> GameRules:
        """Return rules with a different move budget."""
        if max_moves < 0:
            raise ValueError(f"max_moves must be >= 0, got {max_moves}")
        return replace(self, max_moves=max_moves)


DEFAULT_RULES = GameRules()
