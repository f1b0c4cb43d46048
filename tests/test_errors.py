from __future__ import annotations

import asyncio

import pytest

from realitydefender.errors import ERROR_CODES, RealityDefenderError, wrap_error

pytestmark = pytest.mark.unit


def test_error_carries_code_hint_and_status() -> None:
    err = RealityDefenderError(
        "boom", "server_error", hint="try later", status_code=503
    )

    assert str(err) == "boom"
    assert err.message == "boom"
    assert err.code == "server_error"
    assert err.hint == "try later"
    assert err.status_code == 503


def test_error_defaults() -> None:
    err = RealityDefenderError("fail")
    assert err.code == "unknown_error"
    assert err.hint is None
    assert err.status_code is None


def test_error_code_set_is_closed() -> None:
    assert ERROR_CODES == {
        "unauthorized",
        "invalid_request",
        "server_error",
        "timeout",
        "invalid_file",
        "file_too_large",
        "upload_failed",
        "not_found",
        "unknown_error",
    }
    with pytest.raises(ValueError, match="Unknown error code"):
        RealityDefenderError("x", "teapot")  # type: ignore[arg-type]


def test_wrap_error_passes_typed_errors_through_unchanged() -> None:
    original = RealityDefenderError("missing", "not_found")
    assert wrap_error(original, "Failed to get result") is original


def test_wrap_error_wraps_untyped_once_with_message_and_cause() -> None:
    cause = RuntimeError("socket closed")
    err = wrap_error(cause, "Failed to get result")

    assert err.code == "unknown_error"
    assert str(err) == "Failed to get result: socket closed"
    assert err.__cause__ is cause

    # A second pass does not re-wrap.
    assert wrap_error(err, "Outer") is err


def test_wrap_error_uses_requested_code() -> None:
    err = wrap_error(OSError("disk"), "Upload failed", code="upload_failed")
    assert err.code == "upload_failed"


def test_wrap_error_never_swallows_cancellation() -> None:
    with pytest.raises(asyncio.CancelledError):
        wrap_error(asyncio.CancelledError(), "ignored")
