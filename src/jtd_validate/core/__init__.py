"""
Core functionality for jtd-validate.

Options resolution, schema loading, the instance stream, the validation
driver and error reporting.
"""

from .driver import Checked, Fatal, RunResult, ValidationDriver
from .engine import JtdEngine, SchemaEngine, ValidationError
from .instance_stream import InstanceStream
from .options import ValidationOptions, resolve_options
from .reporter import ErrorIndicator, ErrorReporter, to_json_pointer
from .schema_loader import load_schema

__all__ = [
    "Checked",
    "Fatal",
    "RunResult",
    "ValidationDriver",
    "JtdEngine",
    "SchemaEngine",
    "ValidationError",
    "InstanceStream",
    "ValidationOptions",
    "resolve_options",
    "ErrorIndicator",
    "ErrorReporter",
    "to_json_pointer",
    "load_schema",
]
