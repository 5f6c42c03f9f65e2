"""Configuration management for the loan amortizer."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import ConfigurationError

ENV_PREFIX = "LOAN_AMORTIZER_"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("standard", "json")


@dataclass
class Settings:
    """Runtime settings shared by the CLI and the web front end."""

    log_level: str = "WARNING"
    log_format: str = "standard"
    max_rows: int = 120  # schedule rows printed before truncating
    json_indent: int = 2

    def __post_init__(self) -> None:
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigurationError(f"Unknown log level: {self.log_level}")
        if self.log_format not in LOG_FORMATS:
            raise ConfigurationError(f"Unknown log format: {self.log_format}")
        if self.max_rows < 1:
            raise ConfigurationError("max_rows must be positive")
        if self.json_indent < 0:
            raise ConfigurationError("json_indent must not be negative")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Create settings from ``LOAN_AMORTIZER_*`` environment variables."""
        env = os.environ if environ is None else environ
        return cls(
            log_level=env.get(ENV_PREFIX + "LOG_LEVEL", "WARNING"),
            log_format=env.get(ENV_PREFIX + "LOG_FORMAT", "standard").lower(),
            max_rows=_int_from_env(env, "MAX_ROWS", 120),
            json_indent=_int_from_env(env, "JSON_INDENT", 2),
        )


def _int_from_env(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(ENV_PREFIX + key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{ENV_PREFIX}{key} must be an integer, got {raw!r}") from exc
