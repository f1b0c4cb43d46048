"""Media submission: signed-URL file uploads and social-media links."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from realitydefender.constants import SIGNED_URL_PATH, SOCIAL_MEDIA_PATH
from realitydefender.errors import RealityDefenderError, wrap_error
from realitydefender.files import is_valid_url, read_file_content, validate_file
from realitydefender.models import SignedUrlResponse, SocialResponse, UploadResult

if TYPE_CHECKING:
    from pathlib import Path

    from realitydefender.transport import Transport

logger = logging.getLogger(__name__)


async def get_signed_url(transport: Transport, file_name: str) -> SignedUrlResponse:
    """Request a signed upload URL for *file_name*."""
    try:
        body = await transport.post(SIGNED_URL_PATH, {"fileName": file_name})
        return SignedUrlResponse.model_validate(body)
    except ValidationError as exc:
        raise RealityDefenderError(
            f"Invalid response from API - {exc.error_count()} field error(s)",
            "server_error",
        ) from exc
    except Exception as exc:
        raise wrap_error(exc, "Failed to get signed URL")


async def upload_to_signed_url(
    transport: Transport, signed_url: str, file_path: str | Path
) -> None:
    """PUT the file's bytes to *signed_url*."""
    try:
        content = read_file_content(file_path)
        await transport.put(signed_url, content)
    except Exception as exc:
        raise wrap_error(exc, "Upload failed", code="upload_failed")


async def upload_file(transport: Transport, file_path: str | Path) -> UploadResult:
    """Validate, sign, and upload a local file; return its identifiers."""
    path = validate_file(file_path)
    signed = await get_signed_url(transport, path.name)
    await upload_to_signed_url(transport, signed.response.signed_url, path)
    logger.debug("Uploaded %s as request %s", path.name, signed.request_id)
    return UploadResult(request_id=signed.request_id, media_id=signed.media_id)


async def upload_social_media(transport: Transport, social_link: str) -> UploadResult:
    """Submit a social-media post URL for analysis."""
    if not is_valid_url(social_link):
        raise RealityDefenderError(
            f"Invalid social media link: {social_link}",
            "invalid_request",
            hint="Pass a full http(s) URL.",
        )

    try:
        body = await transport.post(SOCIAL_MEDIA_PATH, {"socialLink": social_link})
    except Exception as exc:
        raise wrap_error(exc, "Failed to submit social media link")

    result = SocialResponse.model_validate(body if isinstance(body, dict) else {})
    if not result.request_id:
        raise RealityDefenderError(
            "Invalid response from API - missing requestId", "server_error"
        )
    return UploadResult(request_id=result.request_id)
