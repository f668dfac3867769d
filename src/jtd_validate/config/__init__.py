"""
Configuration management for jtd-validate.

This package provides environment-driven defaults for the CLI.
"""

from .settings import AppConfig, OUTPUT_FORMATS, get_config, reset_config

__all__ = ["AppConfig", "OUTPUT_FORMATS", "get_config", "reset_config"]
