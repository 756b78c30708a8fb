"""
Tests for API Pydantic schemas.

Validates that:
- Request models enforce their constraints
- Responses serialize enums as plain strings
"""

import pytest
from pydantic import ValidationError


class TestPydanticSchemas:
    """Tests for Pydantic schema validation."""

    def test_create_session_defaults(self):
        from lingohop.api.schemas import CreateSessionRequest

        request = CreateSessionRequest()
        assert request.hard_mode is False
        assert request.max_moves is None
        assert request.seed is None

    def test_max_moves_must_be_non_negative(self):
        from lingohop.api.schemas import CreateSessionRequest

        with pytest.raises(ValidationError):
            CreateSessionRequest(max_moves=-1)

    def test_empty_names_rejected(self):
        from lingohop.api.schemas import MoveRequest, SelectLanguageRequest

        with pytest.raises(ValidationError):
            MoveRequest(country="")
        with pytest.raises(ValidationError):
            SelectLanguageRequest(language="")

    def test_language_info_requires_positive_score(self):
        from lingohop.api.schemas import LanguageInfo

        with pytest.raises(ValidationError):
            LanguageInfo(name="french", rarity_score=0)

    def test_move_response_schema(self):
        from lingohop.api.schemas import MoveInfo, MoveResponse

        response = MoveResponse(
            session_id="session-123",
            success=True,
            message="Streak continued with french. +2 points",
            move=MoveInfo(country="Belgium", language="french", points=2),
            advisories=["language_exhausted"],
        )

        data = response.model_dump()
        assert data["move"]["points"] == 2
        assert data["language_overused"] is False
        assert data["api_version"] == "v1"


class TestErrorCodes:
    """Tests for error code serialization."""

    def test_error_response(self):
        from lingohop.api.schemas import ErrorCode, ErrorResponse

        error = ErrorResponse(error="Session x not found", error_code=ErrorCode.SESSION_NOT_FOUND)

        assert error.model_dump(mode="json")["error_code"] == "SESSION_NOT_FOUND"

    def test_all_codes_are_strings(self):
        from lingohop.api.schemas import ErrorCode

        for code in ErrorCode:
            assert isinstance(code.value, str)
            assert code.value == code.name
