"""
FastAPI Application - REST API for game clients.

Endpoints:
    GET    /api/v1/health                       Health check
    GET    /api/v1/languages                    Languages and rarity scores
    POST   /api/v1/sessions                     Create game session
    GET    /api/v1/sessions                     List sessions
    GET    /api/v1/sessions/{id}                Get game state
    DELETE /api/v1/sessions/{id}                End session
    POST   /api/v1/sessions/{id}/language       Select a language
    POST   /api/v1/sessions/{id}/move           Move to a country
    POST   /api/v1/sessions/{id}/reset          Restart the game
    PUT    /api/v1/sessions/{id}/mode           Switch hard mode

Illegal moves are part of normal play: they come back as 200 with
success=false and a message. Unknown sessions (404), unknown language
names (400), malformed bodies (422) and unexpected failures (500) are
reported as errors.

Run with:
    LINGOHOP_DATA_FILE=countries.csv uvicorn --factory lingohop.api.app:create_app
"""

from typing import Optional
import logging
import os

from .. import __version__

logger = logging.getLogger(__name__)

# Environment configuration
LINGOHOP_ENV = os.getenv("LINGOHOP_ENV", "development")
LINGOHOP_DATA_FILE = os.getenv("LINGOHOP_DATA_FILE", None)
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")


def create_app(service=None, data_file: Optional[str] = None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (built from data_file if not provided)
        data_file: CSV to load; defaults to LINGOHOP_DATA_FILE

    Returns:
        FastAPI application instance

    Raises:
        ValueError: if neither a service nor a data file is available
        DataConfigError: if the data file is malformed
    """
    try:
        from fastapi import FastAPI, Request
        from fastapi.exceptions import RequestValidationError
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .service import APIService
    from .schemas import (
        # Request models
        CreateSessionRequest,
        SelectLanguageRequest,
        MoveRequest,
        HardModeRequest,
        # Response models
        GameStateResponse,
        MoveResponse,
        ErrorResponse,
        SessionListResponse,
        EndSessionResponse,
        LanguageListResponse,
        HealthResponse,
        # Enums
        ErrorCode,
    )
    from ..session import SessionManager, SessionNotFoundError

    if service is None:
        data_file = data_file or LINGOHOP_DATA_FILE
        if not data_file:
            raise ValueError("No data file: pass data_file or set LINGOHOP_DATA_FILE")
        from ..data import load_repository
        service = APIService(SessionManager(load_repository(data_file)))

    api_service = service

    app = FastAPI(
        title="Lingohop API",
        description="""
Country hopping by shared official language.

## Flow

1. `POST /sessions` starts a game in a random country
2. `POST /sessions/{id}/language` picks a language spoken there
3. `POST /sessions/{id}/move` hops to another country speaking it

Consecutive hops in one language build a streak:
each hop scores `rarity_score * streak`.

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Session does not exist |
| `LANGUAGE_NOT_FOUND` | Language name not in the dataset |
| `VALIDATION_ERROR` | Request body failed validation (422) |
| `INTERNAL_ERROR` | Unexpected server failure (500) |
        """,
        version=__version__,
        docs_url=None if LINGOHOP_ENV == "production" else "/api/docs",
        redoc_url=None if LINGOHOP_ENV == "production" else "/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(error=message, error_code=error_code).model_dump(mode="json"),
        )

    @app.exception_handler(SessionNotFoundError)
    async def session_not_found(request: Request, exc: SessionNotFoundError):
        return make_error_response(ErrorCode.SESSION_NOT_FOUND, str(exc), status_code=404)

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        details = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        )
        return make_error_response(
            ErrorCode.VALIDATION_ERROR,
            f"Invalid request: {details}",
            status_code=422,
        )

    @app.exception_handler(Exception)
    async def internal_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return make_error_response(
            ErrorCode.INTERNAL_ERROR, "Internal server error", status_code=500
        )

    # =========================================================================
    # System
    # =========================================================================

    @app.get(
        "/api/v1/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="lingohop",
            version=__version__,
            countries=len(api_service.repository),
        )

    @app.get(
        "/api/v1/languages",
        response_model=LanguageListResponse,
        tags=["System"],
        summary="List languages with their rarity scores",
    )
    async def list_languages() -> LanguageListResponse:
        return api_service.list_languages()

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=GameStateResponse,
        tags=["Sessions"],
        summary="Create a new game session",
    )
    async def create_session(body: CreateSessionRequest) -> GameStateResponse:
        return api_service.create_session(body)

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List sessions",
    )
    async def list_sessions() -> SessionListResponse:
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get game state",
    )
    async def get_session(session_id: str) -> GameStateResponse:
        return api_service.get_game_state(session_id)

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a game session",
    )
    async def end_session(session_id: str) -> EndSessionResponse:
        success = api_service.end_session(session_id)
        return EndSessionResponse(success=success, session_id=session_id)

    @app.post(
        "/api/v1/sessions/{session_id}/reset",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Start the game over",
    )
    async def reset_game(session_id: str) -> GameStateResponse:
        return api_service.reset_game(session_id)

    @app.put(
        "/api/v1/sessions/{session_id}/mode",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Switch hard mode on or off",
    )
    async def set_mode(session_id: str, body: HardModeRequest) -> GameStateResponse:
        return api_service.set_hard_mode(session_id, body)

    # =========================================================================
    # Game Loop Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/language",
        response_model=MoveResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Unknown language"},
            404: {"model": ErrorResponse, "description": "Session not found"},
        },
        tags=["Game Loop"],
        summary="Select the language for the next moves",
    )
    async def select_language(session_id: str, body: SelectLanguageRequest):
        """
        Select a language.

        Refused with `language_overused=true` once the language has been
        used 7 times (4 in hard mode). Switching language resets the streak.
        """
        response = api_service.select_language(session_id, body)
        if response.reason == "language_not_found":
            return make_error_response(ErrorCode.LANGUAGE_NOT_FOUND, response.message)
        return response

    @app.post(
        "/api/v1/sessions/{session_id}/move",
        response_model=MoveResponse,
        responses={404: {"model": ErrorResponse, "description": "Session not found"}},
        tags=["Game Loop"],
        summary="Move to a country with the selected language",
    )
    async def move(session_id: str, body: MoveRequest) -> MoveResponse:
        """
        Move to a country.

        `advisories` lists post-move notes such as `language_exhausted`
        or `country_refreshed`.
        """
        response = api_service.move(session_id, body)
        logger.debug("Session %s move to %r: %s", session_id, body.country, response.success)
        return response

    return app
