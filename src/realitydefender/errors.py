"""Error type for the Reality Defender client.

A single exception class carries a closed ``code`` tag. Callers branch on
``err.code`` rather than on subclasses, so classification made at the
transport boundary survives every layer above it unchanged.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Literal, get_args

if TYPE_CHECKING:
    from collections.abc import Iterator

ErrorCode = Literal[
    "unauthorized",
    "invalid_request",
    "server_error",
    "timeout",
    "invalid_file",
    "file_too_large",
    "upload_failed",
    "not_found",
    "unknown_error",
]

ERROR_CODES: frozenset[str] = frozenset(get_args(ErrorCode))


class RealityDefenderError(Exception):
    """Base (and only) exception raised by the client.

    Attributes:
        code: Machine-readable error kind, one of :data:`ErrorCode`.
        hint: Optional actionable suggestion for the caller.
        status_code: HTTP status when the error came from a response.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = "unknown_error",
        *,
        hint: str | None = None,
        status_code: int | None = None,
    ) -> None:
        if code not in ERROR_CODES:
            raise ValueError(f"Unknown error code: {code!r}")
        super().__init__(message)
        self.code: ErrorCode = code
        self.hint = hint
        self.status_code = status_code

    @property
    def message(self) -> str:
        """Human-readable message (same as ``str(err)``)."""
        return self.args[0] if self.args else ""

    def __repr__(self) -> str:
        return f"RealityDefenderError({self.message!r}, code={self.code!r})"


def wrap_error(
    exc: BaseException,
    message: str,
    *,
    code: ErrorCode = "unknown_error",
) -> RealityDefenderError:
    """Return *exc* when already typed, otherwise wrap it once.

    The wrapped message is ``"{message}: {original}"`` and the original
    exception is chained as ``__cause__``. Cancellation is re-raised.
    """
    if isinstance(exc, asyncio.CancelledError):
        raise exc
    if isinstance(exc, RealityDefenderError):
        return exc
    err = RealityDefenderError(f"{message}: {exc}", code)
    err.__cause__ = exc
    return err


def _walk_exception_chain(exc: BaseException) -> Iterator[BaseException]:
    """Yield *exc* and its ``__cause__``/``__context__`` chain, with cycle protection."""
    seen: set[int] = set()
    stack: list[BaseException] = [exc]
    while stack:
        cur = stack.pop()
        if id(cur) in seen:
            continue
        seen.add(id(cur))
        yield cur

        cause = cur.__cause__
        if isinstance(cause, BaseException):
            stack.append(cause)
        context = cur.__context__
        if isinstance(context, BaseException):
            stack.append(context)
