"""
Unit tests for error handler functionality.
"""

import io

import pytest
from rich.console import Console

from jtd_validate.utils.error_handler import (
    EngineError,
    ErrorHandler,
    InputSourceError,
    InstanceParseError,
    InvalidOptionError,
    JTDValidateError,
    MaxDepthExceededError,
    SchemaInvalidError,
    SchemaParseError,
    handle_and_exit,
)


@pytest.fixture
def captured_console(monkeypatch):
    buffer = io.StringIO()
    monkeypatch.setattr(ErrorHandler, "console", Console(file=buffer, width=200, color_system=None))
    return buffer


class TestExceptionHierarchy:
    """Test the fatal error taxonomy."""

    def test_all_fatal_errors_share_a_base(self):
        for cls in (
            InvalidOptionError,
            SchemaParseError,
            SchemaInvalidError,
            InstanceParseError,
            MaxDepthExceededError,
            InputSourceError,
            EngineError,
        ):
            assert issubclass(cls, JTDValidateError)

    def test_exit_codes_are_distinct_and_not_validation_failure(self):
        codes = [
            InvalidOptionError.exit_code,
            SchemaParseError.exit_code,
            SchemaInvalidError.exit_code,
            InstanceParseError.exit_code,
            MaxDepthExceededError.exit_code,
            InputSourceError.exit_code,
            EngineError.exit_code,
        ]
        assert len(set(codes)) == len(codes)
        assert 0 not in codes
        assert 1 not in codes

    def test_error_carries_code_and_details(self):
        error = SchemaParseError("bad", error_code="SCHEMA_NOT_JSON", details={"line": 3})
        assert error.message == "bad"
        assert error.error_code == "SCHEMA_NOT_JSON"
        assert error.details == {"line": 3}
        assert str(error) == "bad"

    def test_details_default_to_empty(self):
        assert JTDValidateError("x").details == {}


class TestErrorHandler:
    """Test diagnostics and suggestions."""

    def test_suggestions_follow_error_code(self):
        error = InvalidOptionError("bad", error_code="INVALID_OPTION")
        suggestions = ErrorHandler._get_error_suggestions(error)
        assert any("non-negative integer" in s for s in suggestions)

    def test_suggestions_for_depth(self):
        error = MaxDepthExceededError("deep", error_code="MAX_DEPTH_EXCEEDED")
        assert any("--max-depth" in s for s in ErrorHandler._get_error_suggestions(error))

    def test_suggestions_for_missing_file(self):
        suggestions = ErrorHandler._get_error_suggestions(FileNotFoundError("nope"))
        assert any("file exists" in s for s in suggestions)

    def test_generic_suggestions(self):
        suggestions = ErrorHandler._get_error_suggestions(Exception("unknown"))
        assert any("--verbose" in s for s in suggestions)

    def test_handle_error_uses_error_exit_code(self, captured_console):
        error = SchemaInvalidError("Invalid schema: ref to non-existent definition", error_code="SCHEMA_INVALID")

        with pytest.raises(SystemExit) as exc_info:
            handle_and_exit(error)

        assert exc_info.value.code == SchemaInvalidError.exit_code
        output = captured_console.getvalue()
        assert "Error: [SCHEMA_INVALID] Invalid schema: ref to non-existent definition" in output
        assert "Suggestions:" in output

    def test_markup_in_messages_is_not_interpreted(self, captured_console):
        error = InstanceParseError("near '[red]x'", error_code="INSTANCE_NOT_JSON")

        with pytest.raises(SystemExit):
            ErrorHandler.handle_error(error, context="instances")

        assert "[instances] near '[red]x'" in captured_console.getvalue()

    def test_exit_code_zero_does_not_exit(self, captured_console):
        ErrorHandler.handle_error(EngineError("soft"), exit_code=0)
        assert "soft" in captured_console.getvalue()
