"""
Observers - collaborators notified after every committed state change.

Rendering is an observer's concern, not the engine's. Observers
receive the live state and must treat it as read-only.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, Union

if TYPE_CHECKING:
    from .state import GameState


class GameObserver(ABC):
    """
    Abstract base class for state-change listeners.

    Called synchronously, in registration order, after language
    selection, moves, refreshes and resets.
    """

    @abstractmethod
    def on_game_state_changed(self, state: GameState):
        """React to a new game state."""


class CallbackObserver(GameObserver):
    """Adapts a plain callable into an observer."""

    def __init__(self, callback: Callable[[GameState], None]):
        self.callback = callback

    def on_game_state_changed(self, state: GameState):
        self.callback(state)


ObserverLike = Union[GameObserver, Callable[["GameState"], None]]


def as_observer(observer: ObserverLike) -> GameObserver:
    """Wrap callables so the engine only deals with GameObserver."""
    if isinstance(observer, GameObserver):
        return observer
    if callable(observer):
        return CallbackObserver(observer)
    raise TypeError(f"Not an observer: {observer!r}")
