"""
Game Engine - the move-resolution state machine.

The engine is the single point of state mutation. Every language
selection and move goes through it and is either refused with a
failed MoveResult (state untouched) or committed atomically.

States are implicit in GameState:
- awaiting language selection: current_language is None
- streak active: a language is selected
- game over: no moves remaining, or a dead end with nowhere to refresh to
"""

from __future__ import annotations
import logging
import random
import threading
from typing import TYPE_CHECKING

from .models import Country, GameMove, Language
from .observer import GameObserver, ObserverLike, as_observer
from .result import Advisory, FailureReason, MoveResult
from .state import GameState
from ..config import DEFAULT_RULES, GameRules

if TYPE_CHECKING:
    from ..data.repository import Repository

logger = logging.getLogger(__name__)


class GameEngine:
    """
    Runs one game session against a repository.

    Usage:
        engine = GameEngine(repository, seed=7)
        engine.select_language(repository.lookup_language("french"))
        result = engine.move_to("Belgium")

    Each engine owns its state and a lock; public operations that
    validate then mutate run under that lock as one unit.
    """

    def __init__(
        self,
        repository: Repository,
        rules: GameRules = DEFAULT_RULES,
        hard_mode: bool = False,
        seed: int | None = None,
        rng: random.Random | None = None,
    ):
        if len(repository) == 0:
            raise ValueError("Cannot start a game with an empty repository")
        self.repository = repository
        self.rules = rules
        self._hard_mode = hard_mode
        self._random = rng or random.Random(seed)
        self._observers: list[GameObserver] = []
        self._lock = threading.RLock()
        self._state = self._new_state()

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def _new_state(self, starting_country: Country | None = None) -> GameState:
        if starting_country is None:
            starting_country = self._random.choice(self.repository.countries)
        return GameState(current_country=starting_country, max_moves=self.rules.max_moves)

    def reset_game(self, starting_country: Country | None = None) -> GameState:
        """
        Discard the current game and start over.

        The starting country is random unless one is given.
        """
        with self._lock:
            self._state = self._new_state(starting_country)
            logger.info("New game starting in %s", self._state.current_country.name)
            self._notify_observers()
            return self._state

    def get_game_state(self) -> GameState:
        """The live game state. Callers must not mutate it."""
        return self._state

    def set_hard_mode(self, hard_mode: bool):
        with self._lock:
            self._hard_mode = hard_mode

    @property
    def hard_mode(self) -> bool:
        return self._hard_mode

    @property
    def language_cap(self) -> int:
        """Uses allowed per language in the active mode."""
        return self.rules.language_cap(self._hard_mode)

    def set_max_moves(self, max_moves: int):
        """
        Override the move budget of the running game.

        Intended for test harnesses that need to reach the end quickly.
        """
        with self._lock:
            self.rules = self.rules.with_max_moves(max_moves)
            self._state.set_max_moves(max_moves)

    # =========================================================================
    # Observers
    # =========================================================================

    def add_observer(self, observer: ObserverLike) -> GameObserver:
        """Register an observer (or plain callable). Returns the registered observer."""
        registered = as_observer(observer)
        self._observers.append(registered)
        return registered

    def remove_observer(self, observer: GameObserver):
        if observer in self._observers:
            self._observers.remove(observer)

    def _notify_observers(self):
        for observer in list(self._observers):
            observer.on_game_state_changed(self._state)

    # =========================================================================
    # Viability
    # =========================================================================

    def _unused_countries(self) -> list[Country]:
        return [
            c for c in self.repository.countries
            if not self._state.is_country_used(c)
        ]

    def is_language_limit_reached(self, language: Language) -> bool:
        return self._state.usage_of(language) >= self.language_cap

    def is_viable_language(self, language: Language) -> bool:
        """True if at least one unused country speaks the language."""
        return any(c.has_language(language) for c in self._unused_countries())

    def has_viable_languages(self, country: Country) -> bool:
        """True if the country speaks a viable language that is still under its cap."""
        return any(
            self.is_viable_language(lang) and not self.is_language_limit_reached(lang)
            for lang in country.languages
        )

    def available_languages(self) -> list[Language]:
        """Languages of the current country that are viable and under their cap."""
        return [
            lang for lang in self._state.current_country.sorted_languages()
            if self.is_viable_language(lang) and not self.is_language_limit_reached(lang)
        ]

    def _refresh_candidates(self) -> list[Country]:
        return [c for c in self._unused_countries() if self.has_viable_languages(c)]

    def is_game_over(self) -> bool:
        """
        True when no further move can score.

        Either the move budget is spent, or the current country is a
        dead end and there is no country left to refresh to.
        """
        with self._lock:
            if not self._state.has_moves_remaining:
                return True
            return (
                not self.has_viable_languages(self._state.current_country)
                and not self._refresh_candidates()
            )

    # =========================================================================
    # Language selection
    # =========================================================================

    def select_language(self, language: Language) -> bool:
        """
        Select the language for the next moves.

        Refused (returns False, state unchanged) once the language has
        been used as many times as the mode allows. Switching to a
        different language starts a new streak.
        """
        with self._lock:
            if self.is_language_limit_reached(language):
                logger.debug(
                    "Refused %s: used %d of %d times",
                    language.name, self._state.usage_of(language), self.language_cap,
                )
                return False

            if language != self._state.current_language:
                self._state.set_current_streak(0)
            self._state.set_current_language(language)
            self._notify_observers()
            return True

    def _overused_message(self, language: Language) -> str:
        return (
            f"You've already used {language.name} {self.language_cap} times. "
            "Please pick another language."
        )

    def select_language_by_name(self, name: str) -> MoveResult:
        """Resolve a language name and select it, reporting the outcome as a result."""
        language = self.repository.lookup_language(name)
        if language is None:
            return MoveResult.failure(
                f"Language not found: {name}",
                reason=FailureReason.LANGUAGE_NOT_FOUND,
            )

        if not self.select_language(language):
            return MoveResult.failure(
                self._overused_message(language),
                reason=FailureReason.LANGUAGE_LIMIT_REACHED,
                language_overused=True,
            )
        return MoveResult.selected(f"Selected {language.name}.")

    # =========================================================================
    # Moves
    # =========================================================================

    def move_to(self, country_name: str) -> MoveResult:
        """
        Attempt to move to a country with the selected language.

        Checks run in order and stop at the first failure:
        game over, unknown country, used country, no language,
        language not spoken, language used up. Only then is the
        move committed.
        """
        with self._lock:
            target = self._validate_move(country_name)
            if isinstance(target, MoveResult):
                logger.debug("Move to %r refused: %s", country_name, target.reason)
                return target

            move = self._continue_streak(target, self._state.current_language)
            return self._after_move(move)

    def _validate_move(self, country_name: str) -> MoveResult | Country:
        """Return the target country, or a failed result."""
        state = self._state
        if not state.has_moves_remaining:
            return MoveResult.failure(
                f"Game over! You've used all {state.max_moves} moves. "
                f"Final score: {state.total_score}",
                reason=FailureReason.GAME_OVER,
            )

        country = self.repository.lookup_country_flexible(country_name)
        if country is None:
            return MoveResult.failure(
                f"Country not found: {country_name}",
                reason=FailureReason.COUNTRY_NOT_FOUND,
            )

        if state.is_country_used(country):
            return MoveResult.failure(
                f"Country already used: {country.name}",
                reason=FailureReason.COUNTRY_ALREADY_USED,
            )

        language = state.current_language
        if language is None:
            return MoveResult.failure(
                "No language selected. Please choose a language first.",
                reason=FailureReason.NO_LANGUAGE_SELECTED,
            )

        if not country.has_language(language):
            return MoveResult.failure(
                f"{country.name} does not speak {language.name}",
                reason=FailureReason.LANGUAGE_NOT_SPOKEN,
            )

        if self.is_language_limit_reached(language):
            return MoveResult.failure(
                self._overused_message(language),
                reason=FailureReason.LANGUAGE_LIMIT_REACHED,
                language_overused=True,
            )

        return country

    def _continue_streak(self, country: Country, language: Language) -> GameMove:
        """Commit a validated move. Always succeeds."""
        state = self._state
        new_streak = state.current_streak + 1
        points = language.rarity_score * new_streak
        move = GameMove(country=country, language=language, points=points)

        state.increment_language_usage(language)
        state.set_current_country(country)
        state.add_move(move)
        state.add_points(points)
        state.set_current_streak(new_streak)

        self._notify_observers()
        return move

    def _after_move(self, move: GameMove) -> MoveResult:
        """Advisory bookkeeping, and auto-refresh when the position is a dead end."""
        state = self._state
        language = move.language
        lines = [
            f"Streak continued with {language.name}. +{move.points} points",
            f"Moves remaining: {state.moves_remaining} of {state.max_moves}",
        ]
        advisories: list[Advisory] = []

        if not state.has_moves_remaining:
            advisories.append(Advisory.GAME_COMPLETE)
            lines.append(
                f"Game complete! You've used all your moves. Final score: {state.total_score}"
            )
            logger.info("Game complete with %d points", state.total_score)
            return MoveResult.moved(move, lines, advisories)

        if self.is_viable_language(language):
            return MoveResult.moved(move, lines, advisories)

        advisories.append(Advisory.LANGUAGE_EXHAUSTED)
        lines.append(f"No more countries available with {language.name}.")

        current = state.current_country
        if not self.has_viable_languages(current):
            lines.append(
                f"No viable languages left for {current.name}. Refreshing to a new country."
            )
            new_country = self.refresh_country()
            if new_country is None:
                advisories.append(Advisory.NO_COUNTRIES_LEFT)
                lines.append("Game complete! No more viable countries available.")
            else:
                advisories.append(Advisory.COUNTRY_REFRESHED)
                lines.append(f"Country refreshed to: {new_country.name}")

        return MoveResult.moved(move, lines, advisories)

    def refresh_country(self) -> Country | None:
        """
        Jump to a random unused country that still has a viable language.

        Clears the selected language and the streak. Returns None, leaving
        the state alone, when no such country exists.
        """
        with self._lock:
            candidates = self._refresh_candidates()
            if not candidates:
                logger.info("No viable countries left to refresh to")
                return None

            new_country = self._random.choice(candidates)
            self._state.set_current_country(new_country)
            self._state.set_current_language(None)
            self._state.set_current_streak(0)

            logger.info("Country refreshed to %s", new_country.name)
            self._notify_observers()
            return new_country
