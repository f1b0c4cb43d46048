"""Real API integration tests.

These tests call the live Reality Defender service and are intentionally
compact:
- ENABLE_API_TESTS=1 is required to run any API tests
- REALITY_DEFENDER_API_KEY must be set

The suite prioritizes high-signal end-to-end coverage with a small call budget.
"""

from __future__ import annotations

import os

import pytest

from realitydefender import RealityDefender, RealityDefenderError

pytestmark = [pytest.mark.api]


@pytest.fixture
def api_key() -> str:
    key = os.getenv("REALITY_DEFENDER_API_KEY")
    if not key:
        pytest.skip("REALITY_DEFENDER_API_KEY not set")
    return key


@pytest.mark.asyncio
async def test_first_page_of_results(api_key: str) -> None:
    async with RealityDefender(api_key=api_key) as rd:
        page = await rd.get_results(0, 2, max_attempts=2, polling_interval_ms=500)

    assert page.current_page == 0
    assert page.current_page_items_count == len(page.items) <= 2


@pytest.mark.asyncio
async def test_text_file_round_trip(api_key: str, tmp_path) -> None:
    sample = tmp_path / "sample.txt"
    sample.write_text(
        "The quarterly report shows steady growth across all regions, "
        "driven by strong demand and improved supply chain efficiency."
    )

    async with RealityDefender(api_key=api_key) as rd:
        upload = await rd.upload(sample)
        result = await rd.get_result(
            upload.request_id, max_attempts=30, polling_interval_ms=2_000
        )

    assert upload.request_id
    assert result.status


@pytest.mark.asyncio
async def test_invalid_key_is_unauthorized() -> None:
    async with RealityDefender(api_key="definitely-not-a-key") as rd:
        with pytest.raises(RealityDefenderError) as excinfo:
            await rd.upload_social_media("https://www.youtube.com/watch?v=abc")

    assert excinfo.value.code == "unauthorized"
