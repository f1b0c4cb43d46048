"""Pytest configuration and fixtures.

Provides environment isolation, logging configuration, and automatic API
test skipping. All fixtures here are autouse unless noted.
"""

from __future__ import annotations

from contextlib import suppress
from dataclasses import dataclass, field
import logging
import os
from typing import Any
from unittest.mock import AsyncMock

import pytest

# =============================================================================
# Test Doubles
# =============================================================================


@dataclass
class FakeTransport:
    """Transport test double returning scripted bodies or raising exceptions.

    Each ``get``/``post`` pops the next item from ``script``; exceptions are
    raised, anything else is returned as the decoded body. Calls are recorded
    for assertions.
    """

    script: list[Any] = field(default_factory=list)
    calls: list[tuple[str, str, Any]] = field(default_factory=list)
    puts: list[tuple[str, bytes, str]] = field(default_factory=list)
    closed: bool = False

    def _next(self) -> Any:
        if not self.script:
            raise AssertionError("FakeTransport script exhausted")
        item = self.script.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    async def get(self, path: str, params: Any = None) -> Any:
        self.calls.append(("GET", path, params))
        return self._next()

    async def post(self, path: str, json: Any = None) -> Any:
        self.calls.append(("POST", path, json))
        return self._next()

    async def put(
        self,
        url: str,
        content: bytes,
        content_type: str = "application/octet-stream",
    ) -> None:
        self.puts.append((url, content, content_type))

    async def aclose(self) -> None:
        self.closed = True

    @property
    def get_calls(self) -> int:
        return sum(1 for method, _, _ in self.calls if method == "GET")


@pytest.fixture
def fake_transport() -> FakeTransport:
    """Return an empty FakeTransport; tests extend ``script`` as needed."""
    return FakeTransport()


@pytest.fixture
def no_sleep(monkeypatch) -> AsyncMock:
    """Replace asyncio.sleep with an AsyncMock so polling runs instantly."""
    sleep_mock = AsyncMock(return_value=None)
    monkeypatch.setattr("asyncio.sleep", sleep_mock)
    return sleep_mock


# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-out: @pytest.mark.allow_dotenv
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    with suppress(Exception):
        monkeypatch.setattr(
            "dotenv.load_dotenv", lambda *_args, **_kwargs: False, raising=False
        )


@pytest.fixture(autouse=True)
def isolate_env(request, monkeypatch):
    """Clear REALITY_DEFENDER_* env vars to prevent test pollution.

    Opt-out: @pytest.mark.allow_env_pollution or @pytest.mark.api
    """
    if request.node.get_closest_marker("allow_env_pollution") or (
        "api" in request.node.keywords
    ):
        return

    for key in list(os.environ.keys()):
        if key.startswith("REALITY_DEFENDER_"):
            monkeypatch.delenv(key, raising=False)


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def quiet_noisy_libraries():
    """Suppress noisy third-party loggers."""
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


# =============================================================================
# Pytest Hooks
# =============================================================================

API_TESTS_REASON = "API tests require ENABLE_API_TESTS=1"


def _api_tests_enabled() -> bool:
    return bool(os.getenv("ENABLE_API_TESTS"))


def pytest_collection_modifyitems(items):
    """Automatically skip API tests when not explicitly enabled."""
    if _api_tests_enabled():
        return
    skip_api = pytest.mark.skip(reason=API_TESTS_REASON)
    for item in items:
        if "api" in item.keywords:
            item.add_marker(skip_api)
