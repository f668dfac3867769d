#!/usr/bin/env python3
"""
Standardized Error Handling for jtd-validate

This module defines the fatal error taxonomy of a validation run and renders
each category as a single human-readable diagnostic on stderr, separate from
the error indicators written to stdout.
"""

import sys
from typing import Optional, Dict, Any, List

from rich.console import Console
from rich.markup import escape


class JTDValidateError(Exception):
    """Base exception class for fatal jtd-validate errors."""

    exit_code = 1

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class InvalidOptionError(JTDValidateError):
    """A command-line option could not be interpreted."""
    exit_code = 2


class SchemaParseError(JTDValidateError):
    """The schema input is not JSON, or not shaped like a JSON Typedef schema."""
    exit_code = 3


class SchemaInvalidError(JTDValidateError):
    """The schema parsed but is structurally unsound."""
    exit_code = 4


class InstanceParseError(JTDValidateError):
    """The instance stream contains malformed JSON."""
    exit_code = 5


class MaxDepthExceededError(JTDValidateError):
    """Following schema references went deeper than allowed."""
    exit_code = 6


class InputSourceError(JTDValidateError):
    """A schema or instance source could not be opened or read."""
    exit_code = 7


class EngineError(JTDValidateError):
    """The validation engine failed in an unexpected way."""
    exit_code = 8


_SUGGESTIONS: Dict[str, List[str]] = {
    "INVALID_OPTION": [
        "Pass a non-negative integer, e.g. --max-depth 32 or --max-errors 10",
        "Use 0 (or omit the flag) for no limit",
    ],
    "INVALID_FORMAT": [
        "Use --format lines or --format array",
    ],
    "STDIN_CONFLICT": [
        "Read the schema from a file when instances come from standard input",
        "Or pass an instances file when the schema is '-'",
    ],
    "SCHEMA_NOT_JSON": [
        "Check that the schema file contains exactly one JSON document",
    ],
    "SCHEMA_MALFORMED": [
        "A JSON Typedef schema must be a JSON object using RFC 8927 keywords",
        "Check keyword value types (e.g. 'properties' must map names to schemas)",
    ],
    "SCHEMA_INVALID": [
        "Check that every 'ref' names an entry under the root 'definitions'",
        "Check that each schema uses only one form (type, enum, elements, ...)",
    ],
    "INSTANCE_NOT_JSON": [
        "Inspect the input near the reported line and column",
        "Instances may be concatenated, but each must be complete JSON",
    ],
    "MAX_DEPTH_EXCEEDED": [
        "Raise --max-depth, or pass 0 to follow references without a limit",
        "Check the schema for references that recurse without consuming input",
    ],
    "SOURCE_UNAVAILABLE": [
        "Check if the file exists",
        "Verify file permissions",
    ],
}


class ErrorHandler:
    """Centralized error handling with user-friendly messages and suggestions."""

    console = Console(stderr=True)

    @staticmethod
    def handle_error(error: Exception, context: Optional[str] = None, exit_code: Optional[int] = None) -> None:
        """
        Print a diagnostic for an error and terminate the program.

        Args:
            error: The exception that occurred
            context: Optional context about where the error occurred
            exit_code: Exit code override; defaults to the error's own code
        """
        console = ErrorHandler.console
        context_prefix = f"[{context}] " if context else ""
        code = getattr(error, "error_code", None)
        code_prefix = f"[{code}] " if code else ""

        console.print(
            f"[red]Error: {escape(code_prefix + context_prefix + str(error))}[/red]",
            soft_wrap=True,
        )

        suggestions = ErrorHandler._get_error_suggestions(error)
        if suggestions:
            console.print("[yellow]Suggestions:[/yellow]")
            for suggestion in suggestions:
                console.print(f"  • {escape(suggestion)}", soft_wrap=True)

        if exit_code is None:
            exit_code = getattr(error, "exit_code", 1)
        if exit_code != 0:
            sys.exit(exit_code)

    @staticmethod
    def _get_error_suggestions(error: Exception) -> list:
        """Get user-friendly suggestions based on the error code."""
        code = getattr(error, "error_code", None)
        if code in _SUGGESTIONS:
            return list(_SUGGESTIONS[code])

        if isinstance(error, (FileNotFoundError, PermissionError)):
            return list(_SUGGESTIONS["SOURCE_UNAVAILABLE"])

        return [
            "Try running with --verbose (or DEBUG=1) for more detail",
            "Ensure the 'jtd' package is installed and up to date",
        ]


# Convenience functions for common error handling patterns
def handle_and_exit(error: Exception, context: Optional[str] = None, exit_code: Optional[int] = None) -> None:
    """Handle an error and exit the program."""
    ErrorHandler.handle_error(error, context, exit_code)
