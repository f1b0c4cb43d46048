"""Result retrieval: single fetch, bounded polling, and paginated listing."""

from __future__ import annotations

import asyncio
from datetime import date
import logging
from typing import TYPE_CHECKING, Any

from realitydefender.constants import (
    ALL_MEDIA_RESULTS_PATH,
    MEDIA_RESULT_PATH,
    STATUS_ANALYZING,
)
from realitydefender.errors import RealityDefenderError, wrap_error
from realitydefender.formatting import format_result, format_results
from realitydefender.models import (
    AllMediaResponse,
    DetectionResult,
    DetectionResultList,
    MediaResponse,
    PollingOptions,
)
from realitydefender.retry import retry_async

if TYPE_CHECKING:
    from realitydefender.transport import Transport

logger = logging.getLogger(__name__)


def format_date_param(value: date) -> str:
    """Render a date filter as ``YYYY-M-D`` (month and day not zero-padded)."""
    return f"{value.year}-{value.month}-{value.day}"


async def get_media_result(transport: Transport, request_id: str) -> MediaResponse:
    """Fetch one raw result snapshot for *request_id*."""
    try:
        body = await transport.get(f"{MEDIA_RESULT_PATH}/{request_id}")
        return MediaResponse.model_validate(body or {})
    except Exception as exc:
        raise wrap_error(exc, "Failed to get result")


async def get_detection_result(
    transport: Transport,
    request_id: str,
    options: PollingOptions | None = None,
) -> DetectionResult:
    """Poll until the result leaves ``ANALYZING`` or the attempt budget is spent.

    Returns the last snapshot, still analyzing, when the budget runs out.
    Fetch errors abort polling and propagate.
    """
    opts = options or PollingOptions()
    attempts = 0

    while True:
        media = await get_media_result(transport, request_id)
        summary = media.results_summary
        if summary is None or summary.status != STATUS_ANALYZING:
            return format_result(media)

        attempts += 1
        if opts.exhausted(attempts):
            logger.debug(
                "Result %s still analyzing after %d attempts; returning snapshot",
                request_id,
                attempts,
            )
            return format_result(media)

        logger.debug(
            "Result %s still analyzing (attempt %d); waiting %d ms",
            request_id,
            attempts,
            opts.polling_interval_ms,
        )
        await asyncio.sleep(opts.polling_interval_ms / 1000)


def _check_page(page_number: int, size: int) -> None:
    if page_number < 0:
        raise RealityDefenderError(
            f"page_number must be ≥ 0, got {page_number}", "invalid_request"
        )
    if size <= 0:
        raise RealityDefenderError(f"size must be > 0, got {size}", "invalid_request")


def _page_params(
    size: int,
    name: str | None,
    start_date: date | None,
    end_date: date | None,
) -> dict[str, Any]:
    params: dict[str, Any] = {"size": size}
    if name:
        params["name"] = name
    if start_date is not None:
        params["startDate"] = format_date_param(start_date)
    if end_date is not None:
        params["endDate"] = format_date_param(end_date)
    return params


async def get_media_results(
    transport: Transport,
    page_number: int = 0,
    size: int = 10,
    name: str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
) -> AllMediaResponse:
    """Fetch one raw page of historical results.

    Args:
        transport: Transport used for the GET.
        page_number: Zero-based page index.
        size: Page size, must be positive.
        name: Optional name filter.
        start_date: Optional lower date bound (``datetime`` also accepted).
        end_date: Optional upper date bound.
    """
    _check_page(page_number, size)
    try:
        body = await transport.get(
            f"{ALL_MEDIA_RESULTS_PATH}/{page_number}",
            _page_params(size, name, start_date, end_date),
        )
        return AllMediaResponse.model_validate(body or {})
    except Exception as exc:
        raise wrap_error(exc, "Failed to get paginated results")


async def get_detection_results(
    transport: Transport,
    page_number: int = 0,
    size: int = 10,
    name: str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    options: PollingOptions | None = None,
) -> DetectionResultList:
    """Fetch and format one page, retrying on any failure.

    Raises:
        RealityDefenderError: ``unknown_error`` once every attempt failed,
            or ``timeout`` when the budget allowed no attempt at all.
    """
    _check_page(page_number, size)
    opts = options or PollingOptions()
    if opts.max_attempts == 0:
        raise RealityDefenderError(
            "Failed to get detection result list after 0 attempts", "timeout"
        )

    try:
        page = await retry_async(
            lambda: get_media_results(
                transport, page_number, size, name, start_date, end_date
            ),
            options=opts,
        )
    except asyncio.CancelledError:
        raise
    except Exception as exc:
        raise RealityDefenderError(
            f"Failed to get paginated results: {exc}", "unknown_error"
        ) from exc

    return format_results(page)
