"""Raw media payload → normalized :class:`DetectionResult`.

Pure functions: no I/O, no hidden state, and no exceptions for missing or
null fields. Either wire models or plain mappings are accepted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from realitydefender.constants import (
    CODE_NOT_APPLICABLE,
    STATUS_FAKE,
    STATUS_MANIPULATED,
    STATUS_NOT_APPLICABLE,
)
from realitydefender.models import (
    AllMediaResponse,
    DetectionResult,
    DetectionResultList,
    MediaResponse,
    ModelResult,
    ModelScore,
)

if TYPE_CHECKING:
    from collections.abc import Mapping


def public_status(status: str) -> str:
    """Translate the backend ``FAKE`` verdict to its public synonym."""
    return STATUS_MANIPULATED if status == STATUS_FAKE else status


def is_applicable(model: ModelResult) -> bool:
    """Return False for models that did not run on this media type."""
    return model.status != STATUS_NOT_APPLICABLE and model.code != CODE_NOT_APPLICABLE


def format_result(raw: MediaResponse | Mapping[str, Any]) -> DetectionResult:
    """Build the public result for one raw media payload.

    Overall score is rescaled from 0-100 to 0-1; per-model scores are passed
    through unchanged. ``None`` is preserved in both cases.
    """
    media = (
        raw
        if isinstance(raw, MediaResponse)
        else MediaResponse.model_validate(raw or {})
    )

    summary = media.results_summary
    if summary is None:
        status = media.overall_status or ""
        final_score = None
    else:
        status = summary.status
        final_score = summary.metadata.final_score

    models = tuple(
        ModelScore(
            name=m.name,
            status=public_status(m.status),
            score=m.prediction_number,
        )
        for m in media.models
        if is_applicable(m)
    )

    return DetectionResult(
        status=public_status(status),
        score=final_score / 100 if final_score is not None else None,
        models=models,
        request_id=media.request_id,
    )


def format_results(raw: AllMediaResponse | Mapping[str, Any]) -> DetectionResultList:
    """Build the public page envelope, formatting every item."""
    page = (
        raw
        if isinstance(raw, AllMediaResponse)
        else AllMediaResponse.model_validate(raw or {})
    )
    return DetectionResultList(
        total_items=page.total_items,
        current_page=page.current_page,
        current_page_items_count=page.current_page_items_count,
        total_pages=page.total_pages,
        items=tuple(format_result(item) for item in page.media_list),
    )
