"""
Unit tests for JSON Pointer rendering and the error reporter.
"""

import io
import json

import pytest

from jtd_validate.core.engine import ValidationError
from jtd_validate.core.reporter import ErrorIndicator, ErrorReporter, to_json_pointer


def _split_pointer(pointer):
    if pointer == "":
        return []
    assert pointer.startswith("/")
    return [part.replace("~1", "/").replace("~0", "~") for part in pointer[1:].split("/")]


class TestToJsonPointer:
    """Test RFC 6901 rendering of raw path segments."""

    def test_empty_path_is_empty_string(self):
        assert to_json_pointer([]) == ""
        assert to_json_pointer(()) == ""

    def test_plain_segments(self):
        assert to_json_pointer(["properties", "name", "type"]) == "/properties/name/type"

    def test_escapes_slash_and_tilde(self):
        assert to_json_pointer(["a/b", "c~d"]) == "/a~1b/c~0d"

    def test_tilde_escaped_before_slash(self):
        # "~1" must not be re-escaped into "~01"
        assert to_json_pointer(["/"]) == "/~1"
        assert to_json_pointer(["~1"]) == "/~01"

    def test_empty_segment_is_kept(self):
        assert to_json_pointer([""]) == "/"
        assert to_json_pointer(["", ""]) == "//"

    @pytest.mark.parametrize(
        "segments",
        [
            ["a/b", "c~d"],
            ["~", "/", "~/", "/~"],
            ["~0", "~1", "~~//"],
            ["0", "12", "key with spaces", "ünïcødé"],
        ],
    )
    def test_round_trip(self, segments):
        assert _split_pointer(to_json_pointer(segments)) == segments


class TestErrorIndicator:
    def test_from_error(self):
        error = ValidationError(instance_path=("users", "0"), schema_path=("elements", "type"))
        indicator = ErrorIndicator.from_error(error)
        assert indicator.to_dict() == {"instancePath": "/users/0", "schemaPath": "/elements/type"}

    def test_root_error(self):
        indicator = ErrorIndicator.from_error(ValidationError((), ("type",)))
        assert indicator.to_dict() == {"instancePath": "", "schemaPath": "/type"}


class TestErrorReporter:
    """Test reporter output conventions and failure tracking."""

    errors = [
        ValidationError(("a",), ("properties", "a", "type")),
        ValidationError(("b/c",), ("properties", "b/c", "type")),
    ]

    def test_no_errors_writes_nothing(self):
        out = io.StringIO()
        reporter = ErrorReporter(stream=out)
        reporter.report([])

        assert out.getvalue() == ""
        assert reporter.failed is False

    def test_lines_format(self):
        out = io.StringIO()
        reporter = ErrorReporter(stream=out)
        reporter.report(self.errors)

        assert out.getvalue().splitlines() == [
            '{"instancePath":"/a","schemaPath":"/properties/a/type"}',
            '{"instancePath":"/b~1c","schemaPath":"/properties/b~1c/type"}',
        ]
        assert reporter.failed is True

    def test_array_format(self):
        out = io.StringIO()
        reporter = ErrorReporter(output_format="array", stream=out)
        reporter.report(self.errors)

        lines = out.getvalue().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0]) == [
            {"instancePath": "/a", "schemaPath": "/properties/a/type"},
            {"instancePath": "/b~1c", "schemaPath": "/properties/b~1c/type"},
        ]

    def test_array_per_failing_instance(self):
        out = io.StringIO()
        reporter = ErrorReporter(output_format="array", stream=out)
        reporter.report(self.errors[:1])
        reporter.report([])
        reporter.report(self.errors[1:])

        assert len(out.getvalue().splitlines()) == 2

    def test_quiet_writes_nothing_but_fails(self):
        out = io.StringIO()
        reporter = ErrorReporter(quiet=True, stream=out)
        reporter.report(self.errors)

        assert out.getvalue() == ""
        assert reporter.failed is True

    def test_non_ascii_is_written_verbatim(self):
        out = io.StringIO()
        ErrorReporter(stream=out).report([ValidationError(("名前",), ("type",))])
        assert out.getvalue().strip() == '{"instancePath":"/名前","schemaPath":"/type"}'

    def test_unknown_format_rejected(self):
        with pytest.raises(ValueError):
            ErrorReporter(output_format="yaml")
