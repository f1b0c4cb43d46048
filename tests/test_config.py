from __future__ import annotations

import pytest

from realitydefender.config import API_KEY_ENV_VAR, BASE_URL_ENV_VAR, Config
from realitydefender.constants import (
    DEFAULT_BASE_URL,
    DEFAULT_POLLING_INTERVAL_MS,
    DEFAULT_TIMEOUT_MS,
)
from realitydefender.errors import RealityDefenderError

pytestmark = pytest.mark.unit


def test_explicit_api_key_and_defaults() -> None:
    config = Config(api_key="rd-key")

    assert config.api_key == "rd-key"
    assert config.base_url == DEFAULT_BASE_URL
    assert config.polling_interval_ms == DEFAULT_POLLING_INTERVAL_MS
    assert config.timeout_ms == DEFAULT_TIMEOUT_MS


def test_api_key_and_base_url_resolve_from_environment(monkeypatch) -> None:
    monkeypatch.setenv(API_KEY_ENV_VAR, "env-key")
    monkeypatch.setenv(BASE_URL_ENV_VAR, "https://api.dev.realitydefender.xyz/")

    config = Config()

    assert config.api_key == "env-key"
    assert config.base_url == "https://api.dev.realitydefender.xyz"


def test_missing_api_key_is_unauthorized_with_hint() -> None:
    with pytest.raises(RealityDefenderError) as excinfo:
        Config()

    assert excinfo.value.code == "unauthorized"
    assert excinfo.value.hint is not None
    assert API_KEY_ENV_VAR in excinfo.value.hint


@pytest.mark.parametrize(
    "kwargs",
    [
        {"polling_interval_ms": -1},
        {"timeout_ms": -5},
        {"request_timeout_s": 0},
    ],
)
def test_invalid_numbers_are_rejected(kwargs) -> None:
    with pytest.raises(RealityDefenderError) as excinfo:
        Config(api_key="k", **kwargs)
    assert excinfo.value.code == "invalid_request"


def test_repr_redacts_api_key() -> None:
    config = Config(api_key="super-secret")
    assert "super-secret" not in repr(config)
    assert "[REDACTED]" in str(config)
