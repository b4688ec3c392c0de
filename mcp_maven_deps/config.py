"""Application configuration using pydantic-settings.

All runtime knobs live here with explicit types and defaults. Every field can
be overridden through an environment variable of the same name
(case-insensitive), e.g. ``HTTP_TIMEOUT_SECONDS=20``.

Notes:
- SEARCH_ROWS is capped at 100: a single bounded page is all the tools ever
  request from Maven Central.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Top-level application settings."""

    # Maven Central search endpoint
    MAVEN_CENTRAL_BASE_URL: str = "https://search.maven.org/solrsearch/select"

    # HTTP behavior (single attempt, no retries)
    HTTP_TIMEOUT_SECONDS: int = Field(default=10, ge=1)

    # Query / selection policy
    SEARCH_ROWS: int = Field(default=100, ge=1, le=100)
    DEFAULT_LIST_DEPTH: int = Field(default=15, ge=1, le=100)
    LATEST_SELECTION_POLICY: Literal["published", "highest"] = "published"

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_JSON: bool = False

    # Transport
    TRANSPORT: Literal["stdio", "http"] = "stdio"
    HTTP_HOST: str = "127.0.0.1"
    HTTP_PORT: int = Field(default=8000, ge=1, le=65535)

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False)


__all__ = ["Settings"]
