from __future__ import annotations

import pytest

from realitydefender import constants
from realitydefender.errors import RealityDefenderError
from realitydefender.files import (
    is_valid_url,
    read_file_content,
    size_limit_for,
    validate_file,
)
from realitydefender.upload import get_signed_url, upload_file, upload_social_media

pytestmark = pytest.mark.unit


def _signed(request_id: str = "req-9", url: str = "https://bucket/put") -> dict:
    return {
        "code": "ok",
        "requestId": request_id,
        "mediaId": "media-9",
        "response": {"signedUrl": url},
    }


# =============================================================================
# File validation
# =============================================================================


@pytest.mark.parametrize(
    ("name", "limit"),
    [
        ("clip.MP4", 262_144_000),
        ("voice.wav", 20_971_520),
        ("notes.txt", 5_242_880),
        ("photo.jpeg", 52_428_800),
        ("archive.zip", None),
    ],
)
def test_size_limit_is_chosen_by_extension(name, limit) -> None:
    assert size_limit_for(name) == limit


def test_validate_file_missing(tmp_path) -> None:
    with pytest.raises(RealityDefenderError) as excinfo:
        validate_file(tmp_path / "nope.jpg")
    assert excinfo.value.code == "invalid_file"
    assert "File not found" in str(excinfo.value)


def test_validate_file_unsupported_extension(tmp_path) -> None:
    target = tmp_path / "data.zip"
    target.write_bytes(b"PK")

    with pytest.raises(RealityDefenderError) as excinfo:
        validate_file(target)
    assert excinfo.value.code == "invalid_file"
    assert excinfo.value.hint is not None
    assert ".jpg" in excinfo.value.hint


def test_validate_file_over_limit(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(
        "realitydefender.files.SUPPORTED_FILE_TYPES",
        ((frozenset({".jpg"}), 4),),
    )
    target = tmp_path / "big.jpg"
    target.write_bytes(b"12345")

    with pytest.raises(RealityDefenderError) as excinfo:
        validate_file(target)
    assert excinfo.value.code == "file_too_large"


def test_validate_file_accepts_supported(tmp_path) -> None:
    target = tmp_path / "ok.png"
    target.write_bytes(b"\x89PNG")
    assert validate_file(str(target)) == target


def test_read_file_content(tmp_path) -> None:
    target = tmp_path / "a.txt"
    target.write_bytes(b"hello")
    assert read_file_content(target) == b"hello"

    with pytest.raises(RealityDefenderError) as excinfo:
        read_file_content(tmp_path / "missing.txt")
    assert excinfo.value.code == "invalid_file"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("https://x.com/user/status/1", True),
        ("http://youtube.com/watch?v=abc", True),
        ("ftp://example.com/file", False),
        ("not a url", False),
        ("https://", False),
        ("   ", False),
        ("", False),
        (None, False),
        (42, False),
    ],
)
def test_is_valid_url(value, expected) -> None:
    assert is_valid_url(value) is expected


# =============================================================================
# Signed-URL upload
# =============================================================================


@pytest.mark.asyncio
async def test_upload_file_signs_then_puts_bytes(tmp_path, fake_transport) -> None:
    target = tmp_path / "face.jpg"
    target.write_bytes(b"jpeg-bytes")
    fake_transport.script.append(_signed())

    result = await upload_file(fake_transport, target)

    assert result.request_id == "req-9"
    assert result.media_id == "media-9"
    assert fake_transport.calls == [
        ("POST", constants.SIGNED_URL_PATH, {"fileName": "face.jpg"})
    ]
    assert fake_transport.puts == [
        ("https://bucket/put", b"jpeg-bytes", "application/octet-stream")
    ]


@pytest.mark.asyncio
async def test_upload_file_validates_before_any_request(tmp_path, fake_transport) -> None:
    with pytest.raises(RealityDefenderError) as excinfo:
        await upload_file(fake_transport, tmp_path / "missing.jpg")

    assert excinfo.value.code == "invalid_file"
    assert fake_transport.calls == []


@pytest.mark.asyncio
async def test_signed_url_response_missing_fields_is_server_error(fake_transport) -> None:
    fake_transport.script.append({"code": "ok"})

    with pytest.raises(RealityDefenderError) as excinfo:
        await get_signed_url(fake_transport, "a.jpg")
    assert excinfo.value.code == "server_error"
    assert "Invalid response from API" in str(excinfo.value)


@pytest.mark.asyncio
async def test_signed_url_transport_errors_keep_their_code(fake_transport) -> None:
    denied = RealityDefenderError("Unauthorized: Invalid API key", "unauthorized")
    fake_transport.script.append(denied)

    with pytest.raises(RealityDefenderError) as excinfo:
        await get_signed_url(fake_transport, "a.jpg")
    assert excinfo.value is denied


@pytest.mark.asyncio
async def test_put_failure_is_upload_failed(tmp_path, fake_transport) -> None:
    target = tmp_path / "face.jpg"
    target.write_bytes(b"x")
    fake_transport.script.append(_signed())

    async def broken_put(*_args, **_kwargs):
        raise ConnectionError("reset by peer")

    fake_transport.put = broken_put  # type: ignore[method-assign]

    with pytest.raises(RealityDefenderError) as excinfo:
        await upload_file(fake_transport, target)
    assert excinfo.value.code == "upload_failed"
    assert isinstance(excinfo.value.__cause__, ConnectionError)


# =============================================================================
# Social media
# =============================================================================


@pytest.mark.asyncio
async def test_social_media_link_is_posted(fake_transport) -> None:
    fake_transport.script.append({"requestId": "social-1"})
    link = "https://www.youtube.com/watch?v=6O0fySNw-Lw"

    result = await upload_social_media(fake_transport, link)

    assert result.request_id == "social-1"
    assert result.media_id is None
    assert fake_transport.calls == [
        ("POST", constants.SOCIAL_MEDIA_PATH, {"socialLink": link})
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize("link", ["", "   ", "youtube.com/watch", "mailto:a@b.c"])
async def test_invalid_social_link_makes_no_request(fake_transport, link) -> None:
    with pytest.raises(RealityDefenderError) as excinfo:
        await upload_social_media(fake_transport, link)

    assert excinfo.value.code == "invalid_request"
    assert fake_transport.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{}, {"requestId": ""}, None])
async def test_social_response_without_request_id(fake_transport, body) -> None:
    fake_transport.script.append(body)

    with pytest.raises(RealityDefenderError) as excinfo:
        await upload_social_media(fake_transport, "https://x.com/a/status/1")
    assert excinfo.value.code == "server_error"
