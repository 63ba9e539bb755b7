"""ClientConfig -- backend client configuration

Loaded from environment variables; nothing about the backend location is
hard-coded beyond the development defaults.
"""

import logging
import os
from pathlib import Path
from typing import Literal

import structlog
from pydantic import BaseModel, Field

log = structlog.get_logger()

DEFAULT_TIMEOUT_S = 30

LogFormat = Literal["dev", "json"]
LOG_FORMATS: tuple[str, ...] = ("dev", "json")


class ClientConfig(BaseModel):
    """Backend client configuration

    Environment variables:
        PRAZOS_API_BASE_URL: backend origin (default http://localhost:8000)
        PRAZOS_API_PREFIX: API path prefix (default /api/v1)
        PRAZOS_API_TIMEOUT_S: request timeout in seconds (default 30)
        PRAZOS_SESSION_FILE: token file; unset keeps the session in memory
        PRAZOS_LOG_FORMAT: "dev" console or "json" lines (default dev)
        PRAZOS_LOG_LEVEL: root log level name (default INFO)
    """

    api_base_url: str = Field(
        default="http://localhost:8000",
        description="Backend origin",
    )
    api_prefix: str = Field(default="/api/v1", description="API path prefix")
    timeout_s: int = Field(default=DEFAULT_TIMEOUT_S, ge=1, description="Request timeout (seconds)")
    session_file: Path | None = Field(default=None, description="Token file path")
    log_format: LogFormat = Field(default="dev", description="Log renderer")
    log_level: str = Field(default="INFO", description="Root log level name")

    @property
    def api_url(self) -> str:
        """Base URL including the API prefix"""
        prefix = "/" + self.api_prefix.strip("/") if self.api_prefix.strip("/") else ""
        return self.api_base_url.rstrip("/") + prefix


def load_client_config() -> ClientConfig:
    """Load ClientConfig from environment variables

    Environment mapping:
        PRAZOS_API_BASE_URL -> api_base_url
        PRAZOS_API_PREFIX -> api_prefix
        PRAZOS_API_TIMEOUT_S -> timeout_s (invalid values fall back to 30)
        PRAZOS_SESSION_FILE -> session_file
        PRAZOS_LOG_FORMAT -> log_format (unknown values fall back to dev)
        PRAZOS_LOG_LEVEL -> log_level (unknown names fall back to INFO)

    Returns:
        ClientConfig instance
    """
    kwargs: dict = {}

    if val := os.environ.get("PRAZOS_API_BASE_URL"):
        kwargs["api_base_url"] = val

    if (val := os.environ.get("PRAZOS_API_PREFIX")) is not None:
        kwargs["api_prefix"] = val

    if val := os.environ.get("PRAZOS_API_TIMEOUT_S"):
        try:
            timeout = int(val)
        except ValueError:
            timeout = 0
        if timeout >= 1:
            kwargs["timeout_s"] = timeout
        else:
            log.warning(
                "invalid_timeout_config",
                env_var="PRAZOS_API_TIMEOUT_S",
                value=val,
                fallback=DEFAULT_TIMEOUT_S,
            )

    if val := os.environ.get("PRAZOS_SESSION_FILE"):
        kwargs["session_file"] = Path(val)

    if val := os.environ.get("PRAZOS_LOG_FORMAT"):
        if val.lower() in LOG_FORMATS:
            kwargs["log_format"] = val.lower()
        else:
            log.warning(
                "invalid_log_format_config",
                env_var="PRAZOS_LOG_FORMAT",
                value=val,
                fallback="dev",
            )

    if val := os.environ.get("PRAZOS_LOG_LEVEL"):
        if isinstance(logging.getLevelName(val.upper()), int):
            kwargs["log_level"] = val.upper()
        else:
            log.warning(
                "invalid_log_level_config",
                env_var="PRAZOS_LOG_LEVEL",
                value=val,
                fallback="INFO",
            )

    return ClientConfig(**kwargs)
