"""API server configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field


@dataclass
class Settings:
    """Application settings, configurable via environment variables.

    Environment variables:
        LSF_HOST: Server bind address (default "0.0.0.0")
        LSF_PORT: Server port (default 8000)
        LSF_DEBUG: Enable debug mode ("1" or "true")
        LSF_CORS_ORIGINS: Comma-separated allowed origins (default: none, reject cross-origin)
        LSF_CONFIG_PATH: YAML rule-table/discourse config loaded at start-up (default: built-in tables)
    """

    host: str = field(default_factory=lambda: os.getenv("LSF_HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("LSF_PORT", "8000")))
    debug: bool = field(
        default_factory=lambda: os.getenv("LSF_DEBUG", "").lower() in ("1", "true")
    )
    cors_origins: list[str] = field(default_factory=lambda: _parse_cors())
    config_path: str | None = field(default_factory=lambda: os.getenv("LSF_CONFIG_PATH") or None)


def _parse_cors() -> list[str]:
    raw = os.getenv("LSF_CORS_ORIGINS", "")
    if not raw:
        return []
    return [o.strip() for o in raw.split(",") if o.strip()]
