"""Project-wide constants for the Reality Defender client."""

from __future__ import annotations

from typing import Final

# ==============================================================================
# Endpoints
# ==============================================================================

DEFAULT_BASE_URL: Final[str] = "https://api.prd.realitydefender.xyz"

SIGNED_URL_PATH: Final[str] = "/api/files/aws-presigned"
MEDIA_RESULT_PATH: Final[str] = "/api/media/users"
ALL_MEDIA_RESULTS_PATH: Final[str] = "/api/v2/media/users/pages"
SOCIAL_MEDIA_PATH: Final[str] = "/api/files/social"

API_KEY_HEADER: Final[str] = "X-API-KEY"

# ==============================================================================
# Polling
# ==============================================================================

DEFAULT_POLLING_INTERVAL_MS: Final[int] = 5_000
DEFAULT_TIMEOUT_MS: Final[int] = 300_000  # 5 minutes
DEFAULT_REQUEST_TIMEOUT_S: Final[float] = 30.0

# ==============================================================================
# Status vocabulary
# ==============================================================================

STATUS_ANALYZING: Final[str] = "ANALYZING"
STATUS_FAKE: Final[str] = "FAKE"
# Public synonym for the backend "FAKE" verdict.
STATUS_MANIPULATED: Final[str] = "MANIPULATED"
STATUS_NOT_APPLICABLE: Final[str] = "NOT_APPLICABLE"
CODE_NOT_APPLICABLE: Final[str] = "not_applicable"

FREE_TIER_NOT_ALLOWED: Final[str] = "free-tier-not-allowed"

# ==============================================================================
# Supported uploads
# ==============================================================================

_MB = 1024 * 1024

# (extensions, size limit in bytes)
SUPPORTED_FILE_TYPES: Final[tuple[tuple[frozenset[str], int], ...]] = (
    (frozenset({".mp4", ".mov"}), 250 * _MB),
    (frozenset({".jpg", ".png", ".jpeg", ".gif", ".webp"}), 50 * _MB),
    (frozenset({".flac", ".wav", ".mp3", ".m4a", ".aac", ".alac", ".ogg"}), 20 * _MB),
    (frozenset({".txt"}), 5 * _MB),
)
