"""Lazy iteration over concatenated JSON documents in a single text stream."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, TextIO

from ..utils.error_handler import InputSourceError, InstanceParseError

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024

_WHITESPACE = re.compile(r"[ \t\n\r]*")
# text that could still be the rest of a number cut off by a read
_NUMBER_TAIL = re.compile(r"[0-9.eE+-]*")
# an unterminated string, possibly stopping inside an escape
_STRING_HEAD = re.compile(r'"(?:[^"\\\x00-\x1f]|\\.)*\\?')
# the rest of a \uXXXX escape
_UNICODE_ESCAPE = re.compile(r"u[0-9a-fA-F]{0,4}")
_LITERALS = ("true", "false", "null", "NaN", "Infinity", "-Infinity")
_EXCERPT_LENGTH = 24


class _NonFiniteNumber(ValueError):
    pass


def _reject_constant(name: str) -> Any:
    raise _NonFiniteNumber(name)


def _may_be_truncated(tail: str) -> bool:
    """Whether ``tail``, the text from a decode error to the end of the buffer,
    could still become valid once more input is read."""
    return (
        _NUMBER_TAIL.fullmatch(tail) is not None
        or _STRING_HEAD.fullmatch(tail) is not None
        or _UNICODE_ESCAPE.fullmatch(tail) is not None
        or any(literal.startswith(tail) for literal in _LITERALS)
    )


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class InstanceStream:
    """Yield one decoded value per top-level JSON document in ``stream``.

    Documents may be separated by whitespace or simply abut each other
    (``{"a":1}[2]"x"``). Input is pulled a line at a time, capped at
    ``chunk_size`` characters per read, and consumed text is dropped, so only
    the document being parsed is held in memory. The stream is forward-only:
    once it ends or raises :class:`InstanceParseError` it stays exhausted.
    """

    def __init__(self, stream: TextIO, chunk_size: int = DEFAULT_CHUNK_SIZE):
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self._stream = stream
        self._chunk_size = chunk_size
        self._decoder = json.JSONDecoder(parse_constant=_reject_constant)
        self._buffer = ""
        self._eof = False
        self._done = False
        # position of _buffer[0] within the whole input
        self._offset = 0
        self._line = 1
        self._line_start = 0
        self.count = 0

    def __iter__(self) -> "InstanceStream":
        return self

    def __next__(self) -> Any:
        if self._done:
            raise StopIteration
        try:
            found, value = self._next_document()
        except (InstanceParseError, InputSourceError):
            self._done = True
            raise
        if not found:
            self._done = True
            logger.debug("Instance stream ended after %d document(s)", self.count)
            raise StopIteration
        self.count += 1
        return value

    def _next_document(self):
        self._skip_whitespace()
        while not self._buffer:
            if self._eof:
                return False, None
            self._fill(1)
            self._skip_whitespace()

        while True:
            try:
                value, end = self._decoder.raw_decode(self._buffer)
            except json.JSONDecodeError as e:
                if self._eof or not _may_be_truncated(self._buffer[e.pos:]):
                    raise self._parse_error(e.msg, e.pos)
                # incomplete; doubling keeps re-parsing linear
                self._fill(len(self._buffer))
                continue
            except _NonFiniteNumber as e:
                raise self._parse_error(f"{e} is not a valid JSON value", 0)
            except RecursionError:
                raise self._parse_error("Document nests too deeply", 0)

            if not self._eof and _is_number(value) and _NUMBER_TAIL.fullmatch(self._buffer, end):
                # a number may continue in the next read
                self._fill(1)
                continue

            self._consume(end)
            return True, value

    def _fill(self, min_chars: int) -> None:
        added = 0
        while added < min_chars:
            try:
                chunk = self._stream.readline(self._chunk_size)
            except UnicodeDecodeError as e:
                raise InstanceParseError(
                    f"Failed to parse instance {self.count + 1}: input is not valid UTF-8 ({e.reason})",
                    error_code="INSTANCE_NOT_JSON",
                    details={"document": self.count + 1},
                ) from e
            except OSError as e:
                raise InputSourceError(
                    f"Failed to read instances: {e}",
                    error_code="SOURCE_UNAVAILABLE",
                ) from e
            if not chunk:
                self._eof = True
                return
            self._buffer += chunk
            added += len(chunk)
        logger.debug("Read %d character(s); buffer holds %d", added, len(self._buffer))

    def _skip_whitespace(self) -> None:
        match = _WHITESPACE.match(self._buffer)
        if match.end():
            self._consume(match.end())

    def _consume(self, end: int) -> None:
        consumed = self._buffer[:end]
        newlines = consumed.count("\n")
        if newlines:
            self._line += newlines
            self._line_start = self._offset + consumed.rfind("\n") + 1
        self._offset += end
        self._buffer = self._buffer[end:]

    def _parse_error(self, msg: str, pos: int) -> InstanceParseError:
        prefix = self._buffer[:pos]
        newlines = prefix.count("\n")
        offset = self._offset + pos
        if newlines:
            line = self._line + newlines
            column = pos - prefix.rfind("\n")
        else:
            line = self._line
            column = offset - self._line_start + 1
        excerpt = self._buffer[pos:pos + _EXCERPT_LENGTH]
        document = self.count + 1
        return InstanceParseError(
            f"Failed to parse instance {document}: {msg} at line {line}, column {column} "
            f"(character offset {offset}) near {excerpt!r}",
            error_code="INSTANCE_NOT_JSON",
            details={
                "document": document,
                "offset": offset,
                "line": line,
                "column": column,
                "excerpt": excerpt,
            },
        )
