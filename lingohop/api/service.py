"""
API Service - Business logic layer between the API and the engine.

The service:
1. Translates API requests to engine calls
2. Manages sessions
3. Formats engine results as response schemas

This layer is framework-agnostic (can be used with FastAPI, a CLI, tests).
Unknown sessions raise SessionNotFoundError; everything else is
reported through the response models.
"""

from __future__ import annotations
from dataclasses import dataclass

from .schemas import (
    # Requests
    CreateSessionRequest,
    SelectLanguageRequest,
    MoveRequest,
    HardModeRequest,
    # Responses
    GameStateResponse,
    MoveResponse,
    LanguageListResponse,
    # Shared
    LanguageInfo,
    MoveInfo,
    # Enums
    SessionStatus,
)
from ..engine_core.models import GameMove
from ..engine_core.result import MoveResult
from ..session import SessionManager, Session


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService(SessionManager(repository))

        state = service.create_session(CreateSessionRequest())
        service.select_language(state.session_id, SelectLanguageRequest(language="french"))
        result = service.move(state.session_id, MoveRequest(country="Belgium"))
    """
    session_manager: SessionManager

    @property
    def repository(self):
        return self.session_manager.repository

    # =========================================================================
    # Sessions
    # =========================================================================

    def create_session(self, request: CreateSessionRequest) -> GameStateResponse:
        """Create a new game session and return its opening state."""
        session = self.session_manager.create_session(
            hard_mode=request.hard_mode,
            max_moves=request.max_moves,
            seed=request.seed,
        )
        return self._state_to_response(session)

    def get_game_state(self, session_id: str) -> GameStateResponse:
        session = self.session_manager.require_session(session_id)
        return self._state_to_response(session)

    def end_session(self, session_id: str) -> bool:
        return self.session_manager.end_session(session_id)

    def list_sessions(self) -> list[str]:
        return self.session_manager.list_sessions()

    def reset_game(self, session_id: str) -> GameStateResponse:
        session = self.session_manager.require_session(session_id)
        session.engine.reset_game()
        return self._state_to_response(session)

    def set_hard_mode(self, session_id: str, request: HardModeRequest) -> GameStateResponse:
        session = self.session_manager.require_session(session_id)
        session.engine.set_hard_mode(request.hard_mode)
        return self._state_to_response(session)

    # =========================================================================
    # Game loop
    # =========================================================================

    def select_language(
        self, session_id: str, request: SelectLanguageRequest
    ) -> MoveResponse:
        session = self.session_manager.require_session(session_id)
        result = session.engine.select_language_by_name(request.language)
        return self._result_to_response(session, result)

    def move(self, session_id: str, request: MoveRequest) -> MoveResponse:
        session = self.session_manager.require_session(session_id)
        result = session.engine.move_to(request.country)
        return self._result_to_response(session, result)

    def list_languages(self) -> LanguageListResponse:
        """All languages, rarest first, then by name."""
        languages = sorted(
            self.repository.languages,
            key=lambda lang: (-lang.rarity_score, lang.key),
        )
        infos = [
            LanguageInfo(
                name=lang.name,
                rarity_score=lang.rarity_score,
                country_count=len(self.repository.countries_speaking(lang)),
            )
            for lang in languages
        ]
        return LanguageListResponse(languages=infos, count=len(infos))

    # =========================================================================
    # Conversion helpers
    # =========================================================================

    def _state_to_response(self, session: Session) -> GameStateResponse:
        engine = session.engine
        state = engine.get_game_state()
        snapshot = state.snapshot()
        return GameStateResponse(
            session_id=session.session_id,
            status=SessionStatus(session.state.value),
            hard_mode=engine.hard_mode,
            language_cap=engine.language_cap,
            current_country=snapshot["current_country"],
            current_country_languages=snapshot["current_country_languages"],
            available_languages=[
                LanguageInfo(
                    name=lang.name,
                    rarity_score=lang.rarity_score,
                    times_used=state.usage_of(lang),
                )
                for lang in engine.available_languages()
            ],
            current_language=snapshot["current_language"],
            current_streak=snapshot["current_streak"],
            total_score=snapshot["total_score"],
            moves_remaining=snapshot["moves_remaining"],
            max_moves=snapshot["max_moves"],
            moves=[MoveInfo(**move) for move in snapshot["moves"]],
            used_countries=snapshot["used_countries"],
            language_usage=snapshot["language_usage"],
        )

    def _result_to_response(self, session: Session, result: MoveResult) -> MoveResponse:
        return MoveResponse(
            session_id=session.session_id,
            success=result.success,
            message=result.message,
            move=_move_info(result.move) if result.move else None,
            language_overused=result.language_overused,
            reason=result.reason.value if result.reason else None,
            advisories=[a.value for a in result.advisories],
            game_state=self._state_to_response(session),
        )


def _move_info(move: GameMove) -> MoveInfo:
    return MoveInfo(
        country=move.country.name,
        language=move.language.name if move.language else None,
        points=move.points,
    )
