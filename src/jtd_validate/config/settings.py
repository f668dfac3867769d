#!/usr/bin/env python3
"""
Centralized Configuration Management for jtd-validate

Environment-driven defaults for the validation run. Command-line flags take
precedence over everything here.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

OUTPUT_FORMATS = ("lines", "array")


@dataclass
class StreamConfig:
    """Configuration for reading the instance stream."""
    chunk_size: int = 64 * 1024


@dataclass
class OutputConfig:
    """Configuration for error indicator output."""
    format: str = "lines"


@dataclass
class AppConfig:
    """Main application configuration."""
    stream: StreamConfig = field(default_factory=StreamConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    debug_mode: bool = False

    def __post_init__(self):
        """Initialize configuration from environment."""
        chunk_size = self._positive_int(os.getenv("JTD_VALIDATE_CHUNK_SIZE"))
        if chunk_size is not None:
            self.stream.chunk_size = chunk_size

        output_format = (os.getenv("JTD_VALIDATE_FORMAT") or "").strip().lower()
        if output_format in OUTPUT_FORMATS:
            self.output.format = output_format

        self.debug_mode = os.getenv("DEBUG", "").lower() in ("true", "1", "yes")

    @staticmethod
    def _positive_int(value: Optional[str]) -> Optional[int]:
        if value is None or str(value).strip() == "":
            return None
        try:
            parsed = int(value)
        except (TypeError, ValueError):
            return None
        return parsed if parsed > 0 else None


# Global configuration instance
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = AppConfig()
    return _config


def reset_config():
    """Reset the global configuration (useful for testing)."""
    global _config
    _config = None
