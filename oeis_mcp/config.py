# SPDX-License-Identifier: MIT

# config.py
"""
Server settings read from the environment.

    HOST            bind address            (default 127.0.0.1)
    PORT            bind port               (default 8000)
    OEIS_BASE_URL   upstream database URL   (default https://oeis.org)
    OEIS_TIMEOUT    per-request timeout, s  (default 10)
    LOG_LEVEL       logging level name      (default INFO)
"""

import os
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .services.oeis_client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

# environment variable -> settings field
ENV_VARS = {
    "HOST": "host",
    "PORT": "port",
    "OEIS_BASE_URL": "base_url",
    "OEIS_TIMEOUT": "timeout",
    "LOG_LEVEL": "log_level",
}


class ServerSettings(BaseModel):
    """Immutable process configuration, loaded once at startup."""

    model_config = ConfigDict(frozen=True)

    host: str = Field(default="127.0.0.1", description="Interface the HTTP transport binds to")
    port: int = Field(default=8000, ge=1, le=65535, description="TCP port for the /mcp endpoint")
    base_url: str = Field(default=DEFAULT_BASE_URL, description="OEIS base URL")
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="Upstream request timeout in seconds")
    log_level: str = Field(default="INFO", description="Root logging level")

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"OEIS_BASE_URL must be an http(s) URL, got {v!r}")
        return v

    @field_validator("log_level")
    @classmethod
    def known_level(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {v!r}")
        return v

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServerSettings":
        """Build settings from environment variables; unset ones keep defaults."""
        environ = os.environ if environ is None else environ
        values = {
            field: environ[var]
            for var, field in ENV_VARS.items()
            if environ.get(var, "").strip()
        }
        return cls(**values)
