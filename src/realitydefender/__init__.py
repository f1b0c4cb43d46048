"""Reality Defender: async client for deepfake and media-authenticity detection.

Public API:
    - RealityDefender: Client (upload, get_result, get_results, poll_for_results)
    - Config: Configuration dataclass
    - RealityDefenderError: The single error type, tagged by ``code``
"""

from __future__ import annotations

import logging

from realitydefender.client import RealityDefender
from realitydefender.config import Config
from realitydefender.errors import ErrorCode, RealityDefenderError
from realitydefender.events import EventEmitter, EventName
from realitydefender.formatting import format_result, format_results
from realitydefender.models import (
    DetectionResult,
    DetectionResultList,
    ModelScore,
    PollingOptions,
    UploadResult,
)
from realitydefender.polling import ResultPoller

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("realitydefender")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("realitydefender").addHandler(logging.NullHandler())

__all__ = [
    "Config",
    "DetectionResult",
    "DetectionResultList",
    "ErrorCode",
    "EventEmitter",
    "EventName",
    "ModelScore",
    "PollingOptions",
    "RealityDefender",
    "RealityDefenderError",
    "ResultPoller",
    "UploadResult",
    "format_result",
    "format_results",
]
