"""Rendering of validation errors as JSON Typedef error indicators."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, TextIO

import typer

from .engine import ValidationError


def to_json_pointer(path: Iterable[str]) -> str:
    """Render raw path segments as an RFC 6901 JSON Pointer.

    ``~`` is escaped before ``/`` so the ``~1`` produced for a slash is not
    escaped again. The root (an empty path) is ``""``, not ``"/"``.
    """
    segments = [segment.replace("~", "~0").replace("/", "~1") for segment in path]
    if not segments:
        return ""
    return "/" + "/".join(segments)


@dataclass(frozen=True)
class ErrorIndicator:
    instance_path: str
    schema_path: str

    @classmethod
    def from_error(cls, error: ValidationError) -> "ErrorIndicator":
        return cls(
            instance_path=to_json_pointer(error.instance_path),
            schema_path=to_json_pointer(error.schema_path),
        )

    def to_dict(self) -> Dict[str, str]:
        return {"instancePath": self.instance_path, "schemaPath": self.schema_path}


def _dumps(value) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


class ErrorReporter:
    """Writes indicators for failing instances and remembers whether any failed.

    ``lines`` emits one indicator object per line; ``array`` emits one array
    per failing instance. Quiet mode writes nothing but still records failure.
    """

    def __init__(self, quiet: bool = False, output_format: str = "lines", stream: Optional[TextIO] = None):
        if output_format not in ("lines", "array"):
            raise ValueError(f"Unknown output format: {output_format}")
        self.quiet = quiet
        self.output_format = output_format
        self._stream = stream
        self._failed = False

    @property
    def failed(self) -> bool:
        return self._failed

    def report(self, errors: Sequence[ValidationError]) -> None:
        if not errors:
            return
        self._failed = True
        if self.quiet:
            return

        indicators: List[Dict[str, str]] = [ErrorIndicator.from_error(e).to_dict() for e in errors]
        if self.output_format == "array":
            typer.echo(_dumps(indicators), file=self._stream)
        else:
            for indicator in indicators:
                typer.echo(_dumps(indicator), file=self._stream)
