"""Schema engine interface and the default JSON Typedef implementation."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Tuple

import jtd

from .options import ValidationOptions
from ..utils.error_handler import (
    EngineError,
    MaxDepthExceededError,
    SchemaInvalidError,
    SchemaParseError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationError:
    """One schema/instance mismatch, as raw path segments from the root."""

    instance_path: Tuple[str, ...] = ()
    schema_path: Tuple[str, ...] = ()


class SchemaEngine(ABC):
    """Capabilities the driver needs from a schema implementation."""

    name = "abstract"

    @abstractmethod
    def parse(self, document: Any) -> Any:
        """Build the engine's schema model from a decoded JSON document.

        Raises:
            SchemaParseError: If the document is not shaped like a schema.
        """

    @abstractmethod
    def check_structure(self, schema: Any) -> None:
        """Reject schemas that parse but can never be used.

        Raises:
            SchemaInvalidError: With the engine's diagnostic.
        """

    @abstractmethod
    def validate(self, schema: Any, instance: Any, options: ValidationOptions) -> List[ValidationError]:
        """Return the errors ``instance`` has against ``schema``.

        Raises:
            MaxDepthExceededError: If ``options.max_depth`` is exceeded.
            EngineError: For any other failure inside the engine.
        """


class JtdEngine(SchemaEngine):
    """RFC 8927 engine backed by the ``jtd`` package."""

    name = "jtd"

    def parse(self, document: Any) -> Any:
        if not isinstance(document, dict):
            raise SchemaParseError(
                f"Malformed schema: expected a JSON object, got {type(document).__name__}",
                error_code="SCHEMA_MALFORMED",
            )
        try:
            return jtd.Schema.from_dict(document)
        except Exception as e:
            raise SchemaParseError(
                f"Malformed schema: {str(e) or type(e).__name__}",
                error_code="SCHEMA_MALFORMED",
                details={"cause": type(e).__name__},
            ) from e

    def check_structure(self, schema: Any) -> None:
        try:
            schema.validate()
        except Exception as e:
            raise SchemaInvalidError(
                f"Invalid schema: {str(e) or type(e).__name__}",
                error_code="SCHEMA_INVALID",
                details={"cause": type(e).__name__},
            ) from e

    def validate(self, schema: Any, instance: Any, options: ValidationOptions) -> List[ValidationError]:
        # jtd treats 0 as "no limit" for both bounds
        jtd_options = jtd.ValidationOptions(
            max_depth=options.max_depth or 0,
            max_errors=options.max_errors or 0,
        )
        try:
            errors = jtd.validate(schema=schema, instance=instance, options=jtd_options)
        except jtd.MaxDepthExceededError as e:
            raise MaxDepthExceededError(
                f"Max depth exceeded: schema references nest deeper than {options.max_depth}",
                error_code="MAX_DEPTH_EXCEEDED",
                details={"max_depth": options.max_depth},
            ) from e
        except RecursionError as e:
            raise MaxDepthExceededError(
                "Max depth exceeded: schema references recursed past the interpreter's recursion limit",
                error_code="MAX_DEPTH_EXCEEDED",
                details={"max_depth": None},
            ) from e
        except Exception as e:
            logger.debug("jtd raised %s", type(e).__name__, exc_info=True)
            raise EngineError(
                f"Failed to validate instance: {e}",
                error_code="ENGINE_FAILURE",
                details={"cause": type(e).__name__},
            ) from e

        return [
            ValidationError(
                instance_path=tuple(str(token) for token in err.instance_path),
                schema_path=tuple(str(token) for token in err.schema_path),
            )
            for err in errors
        ]
