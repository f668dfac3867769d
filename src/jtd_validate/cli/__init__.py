"""Command-line interface for jtd-validate."""

from .commands import app

__all__ = ["app"]
