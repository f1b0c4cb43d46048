"""Per-poller notification dispatcher for ``result`` and ``error`` events.

Each background poll owns its own :class:`EventEmitter`; there is no
process-wide registry. Emission is synchronous: every handler registered for
the channel at emission time runs, in registration order, before ``emit``
returns.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal, Self, get_args, overload

if TYPE_CHECKING:
    from collections.abc import Callable

    from realitydefender.errors import RealityDefenderError
    from realitydefender.models import DetectionResult

    ResultHandler = Callable[[DetectionResult], object]
    ErrorHandler = Callable[[RealityDefenderError], object]

EventName = Literal["result", "error"]
EVENT_NAMES: tuple[EventName, ...] = get_args(EventName)


def _check_event(event: str) -> EventName:
    if event not in EVENT_NAMES:
        raise ValueError(f"Unknown event {event!r}; expected one of {EVENT_NAMES}")
    return event  # type: ignore[return-value]


class EventEmitter:
    """Handler lists for the two notification channels."""

    def __init__(self) -> None:
        self._listeners: dict[EventName, list[Callable[[Any], object]]] = {
            name: [] for name in EVENT_NAMES
        }

    @overload
    def on(self, event: Literal["result"], handler: ResultHandler) -> Self: ...
    @overload
    def on(self, event: Literal["error"], handler: ErrorHandler) -> Self: ...
    def on(self, event: EventName, handler: Callable[[Any], object]) -> Self:
        """Register *handler* for *event*. The same handler may be added twice."""
        self._listeners[_check_event(event)].append(handler)
        return self

    @overload
    def once(self, event: Literal["result"], handler: ResultHandler) -> Self: ...
    @overload
    def once(self, event: Literal["error"], handler: ErrorHandler) -> Self: ...
    def once(self, event: EventName, handler: Callable[[Any], object]) -> Self:
        """Register *handler* to run for the next *event* only."""
        name = _check_event(event)

        def _once(payload: Any) -> object:
            self.off(name, _once)
            return handler(payload)

        _once.listener = handler  # type: ignore[attr-defined]
        self._listeners[name].append(_once)
        return self

    def off(self, event: EventName, handler: Callable[[Any], object]) -> Self:
        """Remove the most recent registration of *handler*, if present."""
        listeners = self._listeners[_check_event(event)]
        for idx in range(len(listeners) - 1, -1, -1):
            current = listeners[idx]
            if current == handler or getattr(current, "listener", None) == handler:
                del listeners[idx]
                break
        return self

    def remove_all_listeners(self, event: EventName | None = None) -> Self:
        """Drop every handler, or only those for *event*."""
        names = EVENT_NAMES if event is None else (_check_event(event),)
        for name in names:
            self._listeners[name].clear()
        return self

    def listener_count(self, event: EventName) -> int:
        """Number of handlers currently registered for *event*."""
        return len(self._listeners[_check_event(event)])

    @overload
    def emit(self, event: Literal["result"], payload: DetectionResult) -> bool: ...
    @overload
    def emit(self, event: Literal["error"], payload: RealityDefenderError) -> bool: ...
    def emit(self, event: EventName, payload: Any) -> bool:
        """Invoke every handler for *event*; return whether any was registered.

        Handlers removed during emission still receive the current payload;
        the removal applies from the next emission on.
        """
        snapshot = tuple(self._listeners[_check_event(event)])
        for handler in snapshot:
            handler(payload)
        return bool(snapshot)
