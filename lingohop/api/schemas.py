"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the exact contract between clients and the engine.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has ended
- LANGUAGE_NOT_FOUND: Language name is not in the dataset
- VALIDATION_ERROR: Request body is malformed
- INTERNAL_ERROR: Unexpected server failure

Illegal moves are NOT errors: they return 200 with success=false.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    ACTIVE = "active"
    GAME_OVER = "game_over"
    ENDED = "ended"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    LANGUAGE_NOT_FOUND = "LANGUAGE_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class LanguageInfo(BaseModel):
    """A language and what it scores."""
    name: str
    rarity_score: int = Field(..., ge=1)
    country_count: Optional[int] = None
    times_used: Optional[int] = None

    model_config = {"from_attributes": True}


class MoveInfo(BaseModel):
    """One entry of the move history."""
    country: str
    language: Optional[str] = Field(None, description="None for the starting placement")
    points: int = Field(0, ge=0)


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Request to create a new game session."""
    hard_mode: bool = Field(False, description="Cap each language at 4 uses instead of 7")
    max_moves: Optional[int] = Field(None, ge=0, description="Override the 30-move budget")
    seed: Optional[int] = Field(None, description="Seed for reproducible games")


class SelectLanguageRequest(BaseModel):
    """Request to select the language for the next moves."""
    language: str = Field(..., min_length=1, description="Language name, any case")


class MoveRequest(BaseModel):
    """Request to move to a country with the selected language."""
    country: str = Field(..., min_length=1, description="Country name, loosely matched")


class HardModeRequest(BaseModel):
    """Request to switch difficulty."""
    hard_mode: bool


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    api_version: str = Field("v1", description="API version")


class GameStateResponse(BaseModel):
    """Complete game state for display."""
    session_id: str
    status: SessionStatus
    hard_mode: bool = False
    language_cap: int
    current_country: str
    current_country_languages: list[str] = Field(default_factory=list)
    available_languages: list[LanguageInfo] = Field(default_factory=list)
    current_language: Optional[str] = None
    current_streak: int = Field(0, ge=0)
    total_score: int = Field(0, ge=0)
    moves_remaining: int = Field(0, ge=0)
    max_moves: int
    moves: list[MoveInfo] = Field(default_factory=list)
    used_countries: list[str] = Field(default_factory=list)
    language_usage: dict[str, int] = Field(default_factory=dict)
    api_version: str = "v1"


class MoveResponse(BaseModel):
    """Outcome of a move or a language selection."""
    session_id: str
    success: bool
    message: str
    move: Optional[MoveInfo] = None
    language_overused: bool = False
    reason: Optional[str] = Field(None, description="Why the attempt was refused")
    advisories: list[str] = Field(default_factory=list)
    game_state: Optional[GameStateResponse] = None
    api_version: str = "v1"


class SessionListResponse(BaseModel):
    """Response listing live sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class LanguageListResponse(BaseModel):
    """Every language in the dataset, rarest first."""
    languages: list[LanguageInfo]
    count: int


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
    countries: int = 0
