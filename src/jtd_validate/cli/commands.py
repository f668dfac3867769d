#!/usr/bin/env python3
"""
CLI Command for jtd-validate

Validates a stream of JSON instances against a JSON Typedef schema. Error
indicators go to stdout; fatal diagnostics go to stderr.
"""

import logging
import sys
from contextlib import ExitStack
from typing import Optional, TextIO

import typer

from .. import __version__
from ..config.settings import OUTPUT_FORMATS, get_config
from ..core.driver import RunResult, ValidationDriver
from ..core.engine import JtdEngine, SchemaEngine
from ..core.instance_stream import InstanceStream
from ..core.options import ValidationOptions, resolve_options
from ..core.reporter import ErrorReporter
from ..core.schema_loader import load_schema
from ..utils.error_handler import InputSourceError, InvalidOptionError, JTDValidateError, handle_and_exit

STDIN = "-"

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False, help="Validate JSON instances against a JSON Typedef schema.")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"jtd-validate {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def _open_source(path: str, stack: ExitStack, what: str) -> TextIO:
    """Open ``path`` for reading, or hand back stdin for ``-``; files close with ``stack``."""
    if path == STDIN:
        return sys.stdin
    try:
        return stack.enter_context(open(path, "r", encoding="utf-8", newline=""))
    except OSError as e:
        raise InputSourceError(
            f"Failed to open {what} '{path}': {e.strerror or e}",
            error_code="SOURCE_UNAVAILABLE",
            details={"path": path},
        ) from e


def check_sources(schema: str, instances: Optional[str]) -> str:
    """Return the effective instances path, refusing to read stdin twice."""
    instances = instances or STDIN
    if schema == STDIN and instances == STDIN:
        raise InvalidOptionError(
            "Schema and instances cannot both be read from standard input",
            error_code="STDIN_CONFLICT",
            details={"schema": schema, "instances": instances},
        )
    return instances


def run_validation(
    schema: str,
    instances: str,
    options: ValidationOptions,
    reporter: ErrorReporter,
    engine: Optional[SchemaEngine] = None,
    chunk_size: Optional[int] = None,
) -> RunResult:
    """Load the schema, then validate every instance in order.

    The instance source is only opened once the schema has been accepted.
    """
    engine = engine or JtdEngine()
    chunk_size = chunk_size or get_config().stream.chunk_size

    with ExitStack() as stack:
        schema_value = load_schema(_open_source(schema, stack, "schema"), engine)
        logger.debug("Schema '%s' accepted; options %s", schema, options)

        stream = InstanceStream(_open_source(instances, stack, "instances"), chunk_size=chunk_size)
        driver = ValidationDriver(schema_value, options, engine)
        return driver.run(stream, reporter)


@app.command()
def validate(
    schema: str = typer.Argument(..., help="Path to the JSON Typedef schema, or '-' for standard input"),
    instances: Optional[str] = typer.Argument(
        None, help="Path to the JSON instances to validate (default: standard input)"
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Print nothing; only signal failure via exit status (implies --max-errors 1)"
    ),
    max_depth: Optional[str] = typer.Option(
        None, "--max-depth", metavar="N", help="Maximum reference depth to follow (0 or absent: no limit)"
    ),
    max_errors: Optional[str] = typer.Option(
        None, "--max-errors", metavar="N", help="Maximum errors to report per instance (0: no limit)"
    ),
    output_format: Optional[str] = typer.Option(
        None, "--format", help="Indicator output: 'lines' (one object per line) or 'array' (one array per instance)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr"),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit"
    ),
) -> None:
    """Validate each JSON document in INSTANCES against SCHEMA."""
    config = get_config()
    _configure_logging(verbose or config.debug_mode)

    try:
        options = resolve_options(max_depth, max_errors, quiet)
        fmt = (output_format or config.output.format).lower()
        if fmt not in OUTPUT_FORMATS:
            raise InvalidOptionError(
                f"Unknown output format: {output_format!r} (expected one of {', '.join(OUTPUT_FORMATS)})",
                error_code="INVALID_FORMAT",
                details={"flag": "--format", "value": output_format},
            )
        instances = check_sources(schema, instances)

        reporter = ErrorReporter(quiet=quiet, output_format=fmt)
        result = run_validation(schema, instances, options, reporter, chunk_size=config.stream.chunk_size)
    except JTDValidateError as e:
        handle_and_exit(e)
        return

    if result.fatal is not None:
        handle_and_exit(result.fatal)
        return

    raise typer.Exit(result.exit_code)


if __name__ == "__main__":
    app()
