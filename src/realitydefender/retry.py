"""Fixed-interval async retry for transient request failures.

Unlike result polling, which repeats on a *business* status, this retries
on raised exceptions. Cancellation is never retried.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, TypeVar

from realitydefender.errors import RealityDefenderError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from realitydefender.models import PollingOptions

T = TypeVar("T")

logger = logging.getLogger(__name__)


def retry_any(exc: BaseException) -> bool:  # noqa: ARG001
    """Retry every failure.

    Cancellation is a ``BaseException`` and never reaches the predicate.
    """
    return True


async def retry_async(
    factory: Callable[[], Awaitable[T]],
    *,
    options: PollingOptions,
    should_retry: Callable[[BaseException], bool] = retry_any,
) -> T:
    """Run an async factory until it succeeds or the attempt budget runs out.

    Sleeps ``options.polling_interval_ms`` between attempts. The last
    exception is re-raised once the budget is exhausted. A budget of zero
    attempts raises a ``timeout`` error without calling *factory*.
    """
    attempts = 0
    while not options.exhausted(attempts):
        try:
            return await factory()
        except Exception as exc:
            attempts += 1
            if not should_retry(exc) or options.exhausted(attempts):
                raise
            logger.warning(
                "Attempt %d failed (%s); retrying in %d ms",
                attempts,
                exc,
                options.polling_interval_ms,
            )
            await asyncio.sleep(options.polling_interval_ms / 1000)

    raise RealityDefenderError(
        f"Operation did not succeed after {attempts} attempts", "timeout"
    )
