"""Runtime settings, read from the environment (and a ``.env`` file if present).

Environment variables:
  TEXT_UTILS_MAX_INPUT_LENGTH  maximum characters accepted per call (1000000)
  TEXT_UTILS_TOOL_TIMEOUT_MS   per-call deadline in milliseconds (30000)
  TEXT_UTILS_HOST / TEXT_UTILS_PORT (or PORT)  HTTP bind address (0.0.0.0:8081)
  TEXT_UTILS_LOG_LEVEL         logging threshold (INFO)
  TEXT_UTILS_QUIET             only log warnings and errors
  TEXT_UTILS_DEBUG             log every received / normalized method
"""
from __future__ import annotations

import os
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from .timeout import TOOL_TIMEOUT_MS
from .validation import MAX_INPUT_LENGTH

ENV_PREFIX = "TEXT_UTILS_"

_TRUTHY = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    max_input_length: int = Field(MAX_INPUT_LENGTH, gt=0, description="Maximum characters accepted per tool call")
    tool_timeout_ms: int = Field(TOOL_TIMEOUT_MS, gt=0, description="Per-call deadline in milliseconds")
    host: str = Field("0.0.0.0", description="HTTP transport bind host")
    port: int = Field(8081, ge=0, le=65535, description="HTTP transport bind port")
    log_level: str = Field("INFO", description="Logging threshold name")
    quiet: bool = Field(False, description="Only log warnings and errors")
    debug: bool = Field(False, description="Log every received JSON-RPC method")

    model_config = {"frozen": True}

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        value = value.upper()
        if value not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"Unknown log level: {value}")
        return value

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        if environ is None:
            load_dotenv()
            environ = os.environ
        values = {}
        for name in ("max_input_length", "tool_timeout_ms", "host", "port", "log_level"):
            raw = environ.get(ENV_PREFIX + name.upper())
            if raw:
                values[name] = raw
        if "port" not in values and environ.get("PORT"):
            values["port"] = environ["PORT"]
        for flag in ("quiet", "debug"):
            values[flag] = environ.get(ENV_PREFIX + flag.upper(), "").strip().lower() in _TRUTHY
        return cls(**values)


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """``Settings.from_env`` for entrypoints: bad values stop start-up with a readable message."""
    try:
        return Settings.from_env(environ)
    except ValidationError as exc:
        raise SystemExit(f"Invalid configuration: {exc}") from exc
