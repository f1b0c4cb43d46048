"""Wire payloads and public result values.

Wire models validate what the backend sends and default anything it omits.
Public values are frozen dataclasses produced by :mod:`realitydefender.formatting`.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, field_validator

from realitydefender.constants import DEFAULT_POLLING_INTERVAL_MS
from realitydefender.errors import RealityDefenderError

# =============================================================================
# Wire models (backend shapes)
# =============================================================================


class _WireModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class ModelResult(_WireModel):
    """Per-model sub-result inside a media response."""

    name: str = ""
    status: str = ""
    code: str | None = None
    prediction_number: float | None = Field(default=None, alias="predictionNumber")
    normalized_prediction_number: float | None = Field(
        default=None, alias="normalizedPredictionNumber"
    )
    final_score: float | None = Field(default=None, alias="finalScore")

    @field_validator("name", "status", mode="before")
    @classmethod
    def _null_text(cls, value: object) -> object:
        return "" if value is None else value


class SummaryMetadata(_WireModel):
    final_score: float | None = Field(default=None, alias="finalScore")


class ResultsSummary(_WireModel):
    """Overall verdict for a media request."""

    status: str = ""
    metadata: SummaryMetadata = Field(default_factory=SummaryMetadata)

    @field_validator("status", mode="before")
    @classmethod
    def _null_status(cls, value: object) -> object:
        return "" if value is None else value

    @field_validator("metadata", mode="before")
    @classmethod
    def _null_metadata(cls, value: object) -> object:
        return {} if value is None else value


class MediaResponse(_WireModel):
    """Raw media result for one request identifier."""

    request_id: str | None = Field(default=None, alias="requestId")
    name: str | None = None
    media_type: str | None = Field(default=None, alias="mediaType")
    overall_status: str | None = Field(default=None, alias="overallStatus")
    results_summary: ResultsSummary | None = Field(default=None, alias="resultsSummary")
    models: list[ModelResult] = Field(default_factory=list)

    @field_validator("models", mode="before")
    @classmethod
    def _null_models(cls, value: object) -> object:
        return [] if value is None else value


class AllMediaResponse(_WireModel):
    """Raw paginated envelope of media results."""

    total_items: int = Field(default=0, alias="totalItems")
    current_page_items_count: int = Field(default=0, alias="currentPageItemsCount")
    total_pages: int = Field(default=0, alias="totalPages")
    current_page: int = Field(default=0, alias="currentPage")
    media_list: list[MediaResponse] = Field(default_factory=list, alias="mediaList")

    @field_validator(
        "total_items",
        "current_page_items_count",
        "total_pages",
        "current_page",
        mode="before",
    )
    @classmethod
    def _null_count(cls, value: object) -> object:
        return 0 if value is None else value

    @field_validator("media_list", mode="before")
    @classmethod
    def _null_list(cls, value: object) -> object:
        return [] if value is None else value


class SignedUrl(_WireModel):
    signed_url: str = Field(alias="signedUrl")


class SignedUrlResponse(_WireModel):
    """Response to a signed-upload-URL request."""

    request_id: str = Field(alias="requestId")
    media_id: str | None = Field(default=None, alias="mediaId")
    response: SignedUrl


class SocialResponse(_WireModel):
    """Response to a social-media link submission."""

    request_id: str | None = Field(default=None, alias="requestId")


# =============================================================================
# Public values
# =============================================================================


@dataclass(frozen=True, slots=True)
class ModelScore:
    """One detection model's verdict.

    ``score`` is the backend prediction number passed through as-is (expected
    0-1), unlike :attr:`DetectionResult.score` which is rescaled from 0-100.
    """

    name: str
    status: str
    score: float | None


@dataclass(frozen=True, slots=True)
class DetectionResult:
    """Normalized detection result for one media request."""

    status: str
    #: 0-1, or *None* while analysis is incomplete.
    score: float | None
    models: tuple[ModelScore, ...] = ()
    request_id: str | None = None


@dataclass(frozen=True, slots=True)
class DetectionResultList:
    """One page of normalized detection results."""

    total_items: int = 0
    current_page: int = 0
    current_page_items_count: int = 0
    total_pages: int = 0
    items: tuple[DetectionResult, ...] = ()


@dataclass(frozen=True, slots=True)
class UploadResult:
    """Identifiers returned when media is submitted."""

    request_id: str
    media_id: str | None = None


@dataclass(frozen=True)
class PollingOptions:
    """Attempt budget and spacing for bounded polling and retries.

    ``max_attempts=None`` means unbounded.
    """

    max_attempts: int | None = None
    polling_interval_ms: int = DEFAULT_POLLING_INTERVAL_MS

    def __post_init__(self) -> None:
        """Validate invariants to keep polling behavior predictable."""
        if self.max_attempts is not None and self.max_attempts < 0:
            raise RealityDefenderError(
                f"max_attempts must be ≥ 0 or None, got {self.max_attempts}",
                "invalid_request",
            )
        if self.polling_interval_ms < 0:
            raise RealityDefenderError(
                f"polling_interval_ms must be ≥ 0, got {self.polling_interval_ms}",
                "invalid_request",
            )

    def exhausted(self, attempts: int) -> bool:
        """Return True once *attempts* has used up the budget."""
        return self.max_attempts is not None and attempts >= self.max_attempts
