"""Configuration: frozen Config with environment-resolved credentials."""

from __future__ import annotations

from dataclasses import dataclass
import os

from dotenv import load_dotenv

from realitydefender.constants import (
    DEFAULT_BASE_URL,
    DEFAULT_POLLING_INTERVAL_MS,
    DEFAULT_REQUEST_TIMEOUT_S,
    DEFAULT_TIMEOUT_MS,
)
from realitydefender.errors import RealityDefenderError

load_dotenv()

API_KEY_ENV_VAR = "REALITY_DEFENDER_API_KEY"
BASE_URL_ENV_VAR = "REALITY_DEFENDER_BASE_URL"


@dataclass(frozen=True)
class Config:
    """Immutable configuration for a :class:`~realitydefender.RealityDefender` client.

    The API key and base URL are auto-resolved from the environment when not
    passed explicitly.

    Example:
        config = Config()  # reads REALITY_DEFENDER_API_KEY
        config = Config(api_key="rd_...", base_url="https://api.dev.realitydefender.xyz")
    """

    #: Auto-resolved from ``REALITY_DEFENDER_API_KEY`` when *None*.
    api_key: str | None = None
    #: Auto-resolved from ``REALITY_DEFENDER_BASE_URL``, then the production URL.
    base_url: str | None = None
    polling_interval_ms: int = DEFAULT_POLLING_INTERVAL_MS
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    request_timeout_s: float = DEFAULT_REQUEST_TIMEOUT_S

    def __post_init__(self) -> None:
        """Auto-resolve credentials and validate configuration."""
        if self.polling_interval_ms < 0:
            raise RealityDefenderError(
                f"polling_interval_ms must be ≥ 0, got {self.polling_interval_ms}",
                "invalid_request",
                hint="This controls the delay between result polling attempts.",
            )
        if self.timeout_ms < 0:
            raise RealityDefenderError(
                f"timeout_ms must be ≥ 0, got {self.timeout_ms}",
                "invalid_request",
                hint="This bounds how long background polling may run.",
            )
        if self.request_timeout_s <= 0:
            raise RealityDefenderError(
                f"request_timeout_s must be > 0, got {self.request_timeout_s}",
                "invalid_request",
            )

        if self.api_key is None:
            object.__setattr__(self, "api_key", os.environ.get(API_KEY_ENV_VAR))
        if not self.api_key:
            raise RealityDefenderError(
                "API key is required",
                "unauthorized",
                hint=f"Set {API_KEY_ENV_VAR} environment variable or pass api_key=...",
            )

        base_url = self.base_url or os.environ.get(BASE_URL_ENV_VAR) or DEFAULT_BASE_URL
        object.__setattr__(self, "base_url", base_url.rstrip("/"))

    def __str__(self) -> str:
        """Return a redacted, developer-friendly representation."""
        return (
            f"Config(api_key={'[REDACTED]' if self.api_key else None}, "
            f"base_url={self.base_url!r}, "
            f"polling_interval_ms={self.polling_interval_ms}, "
            f"timeout_ms={self.timeout_ms})"
        )

    __repr__ = __str__
