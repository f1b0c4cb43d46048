"""Public client facade."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from realitydefender.config import Config
from realitydefender.errors import wrap_error
from realitydefender.models import PollingOptions
from realitydefender.polling import ResultPoller
from realitydefender.results import get_detection_result, get_detection_results
from realitydefender.transport import HttpTransport
from realitydefender.upload import upload_file, upload_social_media

if TYPE_CHECKING:
    from datetime import date
    from pathlib import Path
    from types import TracebackType

    from realitydefender.models import DetectionResult, DetectionResultList, UploadResult
    from realitydefender.transport import Transport

logger = logging.getLogger(__name__)


class RealityDefender:
    """Client for the Reality Defender media-authenticity API.

    Example:
        async with RealityDefender() as rd:  # reads REALITY_DEFENDER_API_KEY
            upload = await rd.upload("photo.jpg")
            result = await rd.get_result(upload.request_id)
            print(result.status, result.score)
    """

    def __init__(
        self,
        config: Config | None = None,
        *,
        api_key: str | None = None,
        base_url: str | None = None,
        transport: Transport | None = None,
    ) -> None:
        """Create a client.

        Args:
            config: Full configuration. Built from *api_key*/*base_url* and the
                environment when omitted.
            api_key: Shorthand for ``Config(api_key=...)``.
            base_url: Shorthand for ``Config(base_url=...)``.
            transport: Custom transport; an :class:`HttpTransport` is built
                from *config* otherwise.
        """
        self.config = config or Config(api_key=api_key, base_url=base_url)
        self._transport: Transport = transport or HttpTransport(
            self.config.api_key or "",
            self.config.base_url or "",
            timeout_s=self.config.request_timeout_s,
        )

    def _options(
        self, max_attempts: int | None, polling_interval_ms: int | None
    ) -> PollingOptions:
        return PollingOptions(
            max_attempts=max_attempts,
            polling_interval_ms=(
                self.config.polling_interval_ms
                if polling_interval_ms is None
                else polling_interval_ms
            ),
        )

    async def upload(self, file_path: str | Path) -> UploadResult:
        """Upload a local file for analysis and return its request identifier."""
        try:
            return await upload_file(self._transport, file_path)
        except Exception as exc:
            raise wrap_error(exc, "Upload failed", code="upload_failed")

    async def upload_social_media(self, social_link: str) -> UploadResult:
        """Submit a social-media post URL for analysis."""
        try:
            return await upload_social_media(self._transport, social_link)
        except Exception as exc:
            raise wrap_error(exc, "Upload failed", code="upload_failed")

    async def get_result(
        self,
        request_id: str,
        *,
        max_attempts: int | None = None,
        polling_interval_ms: int | None = None,
    ) -> DetectionResult:
        """Poll until the analysis finishes or *max_attempts* fetches were made.

        ``max_attempts=None`` polls until a terminal status. When the budget
        runs out the latest (still ``ANALYZING``) snapshot is returned.
        """
        return await get_detection_result(
            self._transport,
            request_id,
            self._options(max_attempts, polling_interval_ms),
        )

    async def get_results(
        self,
        page_number: int = 0,
        size: int = 10,
        *,
        name: str | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        max_attempts: int | None = None,
        polling_interval_ms: int | None = None,
    ) -> DetectionResultList:
        """Return one page of past results, retrying transient failures."""
        return await get_detection_results(
            self._transport,
            page_number,
            size,
            name,
            start_date,
            end_date,
            self._options(max_attempts, polling_interval_ms),
        )

    async def detect(
        self,
        file_path: str | Path,
        *,
        max_attempts: int | None = None,
        polling_interval_ms: int | None = None,
    ) -> DetectionResult:
        """Upload *file_path* and wait for its result."""
        upload = await self.upload(file_path)
        return await self.get_result(
            upload.request_id,
            max_attempts=max_attempts,
            polling_interval_ms=polling_interval_ms,
        )

    async def _fetch_once(self, request_id: str) -> DetectionResult:
        return await get_detection_result(
            self._transport, request_id, PollingOptions(max_attempts=1)
        )

    def poll_for_results(
        self,
        request_id: str,
        *,
        polling_interval_ms: int | None = None,
        timeout_ms: int | None = None,
    ) -> ResultPoller:
        """Start background polling and return the poller to subscribe to.

        Must be called from a running event loop. Outcomes arrive only through
        the poller's ``"result"`` and ``"error"`` events; await
        ``poller.wait()`` to observe completion.
        """
        poller = ResultPoller(
            self._fetch_once,
            request_id,
            polling_interval_ms=(
                self.config.polling_interval_ms
                if polling_interval_ms is None
                else polling_interval_ms
            ),
            timeout_ms=self.config.timeout_ms if timeout_ms is None else timeout_ms,
        )
        poller.start()
        return poller

    async def aclose(self) -> None:
        """Release the underlying transport."""
        aclose: Any = getattr(self._transport, "aclose", None)
        if callable(aclose):
            try:
                await aclose()
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                # Cleanup should never mask the primary failure.
                logger.warning("Transport cleanup failed: %s", exc)

    async def __aenter__(self) -> RealityDefender:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
