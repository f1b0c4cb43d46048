"""Local file and link validation for media submission."""

from __future__ import annotations

from pathlib import Path
from urllib.parse import urlparse

from realitydefender.constants import SUPPORTED_FILE_TYPES
from realitydefender.errors import RealityDefenderError


def size_limit_for(path: str | Path) -> int | None:
    """Return the byte limit for *path*'s extension, or None when unsupported."""
    suffix = Path(path).suffix.lower()
    for extensions, limit in SUPPORTED_FILE_TYPES:
        if suffix in extensions:
            return limit
    return None


def validate_file(path: str | Path) -> Path:
    """Check that *path* exists, has a supported extension, and fits its limit.

    Raises:
        RealityDefenderError: ``invalid_file`` for missing or unsupported
            files, ``file_too_large`` when over the per-type limit.
    """
    p = Path(path)
    if not p.is_file():
        raise RealityDefenderError(f"File not found: {p}", "invalid_file")

    limit = size_limit_for(p)
    if limit is None:
        raise RealityDefenderError(
            f"Unsupported file type: {p.suffix or p.name}",
            "invalid_file",
            hint="Supported: "
            + ", ".join(
                sorted(ext for extensions, _ in SUPPORTED_FILE_TYPES for ext in extensions)
            ),
        )

    size = p.stat().st_size
    if size > limit:
        raise RealityDefenderError(
            f"File too large: {p.name} is {size} bytes (limit {limit})",
            "file_too_large",
        )
    return p


def read_file_content(path: str | Path) -> bytes:
    """Read the whole file, mapping OS failures to ``invalid_file``."""
    p = Path(path)
    if not p.exists():
        raise RealityDefenderError(f"File not found: {p}", "invalid_file")
    try:
        return p.read_bytes()
    except OSError as exc:
        raise RealityDefenderError(
            f"Failed to read file: {exc}", "invalid_file"
        ) from exc


def is_valid_url(value: object) -> bool:
    """Return True for non-blank ``http``/``https`` URLs with a host."""
    if not isinstance(value, str) or not value.strip():
        return False
    try:
        parsed = urlparse(value.strip())
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)
