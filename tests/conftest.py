"""
Pytest configuration and shared fixtures for jtd-validate tests.
"""

import json
import tempfile
from pathlib import Path

import pytest

from jtd_validate.config.settings import reset_config


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Start every test from environment-free configuration."""
    for var in ("JTD_VALIDATE_CHUNK_SIZE", "JTD_VALIDATE_FORMAT", "DEBUG"):
        monkeypatch.delenv(var, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def write_schema(temp_dir):
    """Write a schema document (dict or raw text) and return its path."""
    def _write(schema, name="schema.json"):
        path = temp_dir / name
        text = schema if isinstance(schema, str) else json.dumps(schema)
        path.write_text(text, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def write_instances(temp_dir):
    """Write raw instance stream text and return its path."""
    def _write(text, name="instances.json"):
        path = temp_dir / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def string_schema():
    return {"type": "string"}


@pytest.fixture
def three_strings_schema():
    """A schema an object can violate in three independent places."""
    return {
        "optionalProperties": {
            "a": {"type": "string"},
            "b": {"type": "string"},
            "c": {"type": "string"},
        }
    }


@pytest.fixture
def recursive_schema():
    """Arrays of arrays, expressed through a self-referencing definition."""
    return {
        "definitions": {"nested": {"elements": {"ref": "nested"}}},
        "ref": "nested",
    }
