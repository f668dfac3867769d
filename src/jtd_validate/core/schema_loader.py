"""Load and vet the schema before any instance is read."""

from __future__ import annotations

import json
import logging
from typing import Any, TextIO

from .engine import SchemaEngine
from ..utils.error_handler import InputSourceError, SchemaParseError

logger = logging.getLogger(__name__)


def load_schema(stream: TextIO, engine: SchemaEngine) -> Any:
    """Read exactly one JSON document from ``stream`` and turn it into a checked schema.

    Args:
        stream: Text source holding the schema.
        engine: Engine that owns the schema model.

    Returns:
        The engine's schema value, already structurally checked.

    Raises:
        SchemaParseError: On malformed JSON or a document that is not a schema.
        SchemaInvalidError: If the engine's structural check fails.
        InputSourceError: If the stream cannot be read.
    """
    try:
        document = json.load(stream)
    except json.JSONDecodeError as e:
        raise SchemaParseError(
            f"Failed to parse schema: {e.msg} (line {e.lineno}, column {e.colno})",
            error_code="SCHEMA_NOT_JSON",
            details={"offset": e.pos, "line": e.lineno, "column": e.colno},
        ) from e
    except UnicodeDecodeError as e:
        raise SchemaParseError(
            f"Failed to parse schema: input is not valid UTF-8 ({e.reason})",
            error_code="SCHEMA_NOT_JSON",
        ) from e
    except OSError as e:
        raise InputSourceError(
            f"Failed to read schema: {e}",
            error_code="SOURCE_UNAVAILABLE",
        ) from e

    logger.debug("Parsed schema document; handing it to the %s engine", engine.name)
    schema = engine.parse(document)
    engine.check_structure(schema)
    return schema
