"""Background result polling that reports through events instead of returning.

A :class:`ResultPoller` runs one time-budgeted loop for one request
identifier and fires exactly one notification: ``result`` with the terminal
:class:`DetectionResult`, or ``error`` with a :class:`RealityDefenderError`
(including ``timeout``). ``run()`` never raises to its caller.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Literal

from realitydefender.constants import (
    DEFAULT_POLLING_INTERVAL_MS,
    DEFAULT_TIMEOUT_MS,
    STATUS_ANALYZING,
)
from realitydefender.errors import RealityDefenderError, wrap_error
from realitydefender.events import EventEmitter

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from realitydefender.events import EventName
    from realitydefender.models import DetectionResult

logger = logging.getLogger(__name__)

PollerState = Literal["idle", "running", "completed"]


def _timeout_error() -> RealityDefenderError:
    return RealityDefenderError("Polling timeout exceeded", "timeout")


class ResultPoller:
    """Polls one request until a terminal status, an error, or the timeout.

    Example:
        poller = client.poll_for_results(request_id, timeout_ms=60_000)
        poller.on("result", lambda r: print(r.status))
        poller.on("error", lambda e: print(e.code))
        await poller.wait()
    """

    def __init__(
        self,
        fetch: Callable[[str], Awaitable[DetectionResult]],
        request_id: str,
        *,
        polling_interval_ms: int = DEFAULT_POLLING_INTERVAL_MS,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        events: EventEmitter | None = None,
    ) -> None:
        """Bind the poller to a one-shot *fetch* callable and a request id.

        Args:
            fetch: Coroutine function returning one formatted snapshot per call.
            request_id: Identifier returned at submission.
            polling_interval_ms: Delay between attempts.
            timeout_ms: Total polling budget; ``<= 0`` times out immediately.
            events: Emitter to notify; a fresh one is created when omitted.
        """
        if polling_interval_ms < 0:
            raise RealityDefenderError(
                f"polling_interval_ms must be ≥ 0, got {polling_interval_ms}",
                "invalid_request",
            )
        self.request_id = request_id
        self.polling_interval_ms = polling_interval_ms
        self.timeout_ms = timeout_ms
        self.events = events if events is not None else EventEmitter()
        self.attempts = 0
        self.elapsed_ms = 0
        self.state: PollerState = "idle"
        self._fetch = fetch
        self._task: asyncio.Task[None] | None = None

    def on(self, event: EventName, handler: Callable[[Any], object]) -> ResultPoller:
        """Subscribe *handler* to ``"result"`` or ``"error"``."""
        self.events.on(event, handler)  # type: ignore[call-overload]
        return self

    def off(self, event: EventName, handler: Callable[[Any], object]) -> ResultPoller:
        """Unsubscribe *handler*; takes effect before the next notification."""
        self.events.off(event, handler)
        return self

    @property
    def done(self) -> bool:
        """Whether the poll has finished (a notification was attempted)."""
        return self.state == "completed"

    def _notify(self, event: EventName, payload: Any) -> None:
        try:
            self.events.emit(event, payload)  # type: ignore[call-overload]
        except Exception:
            # A failing subscriber must not keep the loop alive or leak out.
            logger.exception("Subscriber for %r on %s raised", event, self.request_id)

    async def _sleep(self) -> None:
        self.elapsed_ms += self.polling_interval_ms
        await asyncio.sleep(self.polling_interval_ms / 1000)

    async def run(self) -> None:
        """Run the polling loop to completion on the current task."""
        if self.state != "idle":
            raise RuntimeError("ResultPoller.run() may only be called once")
        self.state = "running"
        try:
            await self._run()
        finally:
            self.state = "completed"

    async def _run(self) -> None:
        if self.timeout_ms <= 0:
            self._notify("error", _timeout_error())
            return

        completed = False
        while not completed and self.elapsed_ms < self.timeout_ms:
            self.attempts += 1
            logger.debug("Polling %s (attempt %d)", self.request_id, self.attempts)
            try:
                result = await self._fetch(self.request_id)
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                err = wrap_error(exc, "Failed to get result")
                if err.code == "not_found":
                    # The backend may not have indexed a fresh submission yet.
                    await self._sleep()
                    continue
                completed = True
                self._notify("error", err)
                break

            if result.status == STATUS_ANALYZING:
                await self._sleep()
                continue

            completed = True
            self._notify("result", result)

        if not completed and self.elapsed_ms >= self.timeout_ms:
            logger.debug(
                "Polling %s timed out after %d ms", self.request_id, self.elapsed_ms
            )
            self._notify("error", _timeout_error())

    def start(self) -> asyncio.Task[None]:
        """Schedule :meth:`run` on the running event loop and return its task.

        Handlers attached right after ``start()`` (before the caller yields)
        see every notification.
        """
        if self._task is None:
            self._task = asyncio.get_running_loop().create_task(
                self.run(), name=f"realitydefender-poll-{self.request_id}"
            )
        return self._task

    async def wait(self) -> None:
        """Wait for the poll to finish, starting it if needed."""
        await self.start()
