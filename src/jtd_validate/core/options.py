"""Resolution of validation limits from raw command-line input."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from ..utils.error_handler import InvalidOptionError

_NON_NEGATIVE_INT = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class ValidationOptions:
    """Effective limits for one run. ``None`` means unbounded."""

    max_depth: Optional[int] = None
    max_errors: Optional[int] = None


def _parse_limit(flag: str, raw: str) -> int:
    text = raw.strip()
    # int() alone would also accept "+3", "-0" and "1_000"
    if not _NON_NEGATIVE_INT.fullmatch(text):
        raise InvalidOptionError(
            f"Failed to parse {flag}: {raw!r} is not a non-negative integer",
            error_code="INVALID_OPTION",
            details={"flag": flag, "value": raw},
        )
    return int(text)


def _unbounded_if_zero(value: int) -> Optional[int]:
    return value or None


def resolve_options(
    max_depth: Optional[str] = None,
    max_errors: Optional[str] = None,
    quiet: bool = False,
) -> ValidationOptions:
    """Derive the effective :class:`ValidationOptions` for a run.

    Args:
        max_depth: Raw ``--max-depth`` value, or None when the flag was absent.
        max_errors: Raw ``--max-errors`` value, or None when the flag was absent.
        quiet: Whether indicator output is suppressed.

    Returns:
        The resolved options. An explicit ``--max-errors`` always wins; without
        one, quiet mode collects a single error per instance since none of them
        will be printed.

    Raises:
        InvalidOptionError: If a numeric flag is not a non-negative integer.
    """
    depth = None
    if max_depth is not None:
        depth = _unbounded_if_zero(_parse_limit("--max-depth", max_depth))

    if max_errors is not None:
        errors = _unbounded_if_zero(_parse_limit("--max-errors", max_errors))
    elif quiet:
        errors = 1
    else:
        errors = None

    return ValidationOptions(max_depth=depth, max_errors=errors)
