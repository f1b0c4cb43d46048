"""Test helpers (small payload builders).

Keep this file tiny: it exists so tests describe backend payloads by the
fields they care about instead of repeating full JSON documents.
"""

from __future__ import annotations

from typing import Any


def media_payload(
    status: str | None = "AUTHENTIC",
    final_score: float | None = None,
    *,
    models: list[dict[str, Any]] | None = None,
    request_id: str = "req-1",
) -> dict[str, Any]:
    """Build a raw media result body as the backend returns it."""
    body: dict[str, Any] = {
        "requestId": request_id,
        "name": "sample",
        "mediaType": "IMAGE",
        "overallStatus": "COMPLETED",
        "models": models or [],
    }
    if status is not None:
        body["resultsSummary"] = {
            "status": status,
            "metadata": {"finalScore": final_score},
        }
    return body


def model_payload(
    name: str,
    status: str,
    prediction: float | None = None,
    *,
    code: str | None = None,
) -> dict[str, Any]:
    """Build one raw per-model entry."""
    body: dict[str, Any] = {
        "name": name,
        "status": status,
        "predictionNumber": prediction,
        "normalizedPredictionNumber": None,
        "rollingAvgNumber": None,
        "data": None,
    }
    if code is not None:
        body["code"] = code
    return body
