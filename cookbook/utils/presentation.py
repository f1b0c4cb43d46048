"""Shared output helpers for cookbook recipe terminal presentation.

These helpers aim for:
- scan-friendly sectioning
- compact, consistent key/value rows
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from cookbook.utils.runtime import print_run_mode

if TYPE_CHECKING:
    from realitydefender import Config, DetectionResult


def _display_path(path: Path) -> str:
    """Prefer short, cwd-relative paths for terminal output."""
    try:
        return str(path.resolve().relative_to(Path.cwd().resolve()))
    except ValueError:
        return str(path)


def _display_value(value: object) -> str:
    if isinstance(value, Path):
        return _display_path(value)
    if value is None:
        return "n/a"
    return str(value)


def format_score(score: float | None) -> str:
    """Render a 0..1 score as a percentage, or ``n/a``."""
    return "n/a" if score is None else f"{score:.1%}"


def print_header(title: str, *, config: Config) -> None:
    """Print recipe title with a consistent runtime mode line."""
    print(title)
    print("=" * len(title))
    print_run_mode(config)


def print_section(title: str) -> None:
    """Print a named section heading."""
    print(f"\n{title}")
    print("-" * len(title))


def print_kv_rows(rows: list[tuple[str, object]]) -> None:
    """Print compact key/value rows using a uniform bullet style."""
    for key, value in rows:
        rendered = _display_value(value)
        lines = rendered.splitlines() or [""]
        print(f"- {key}: {lines[0]}")
        for cont in lines[1:]:
            print(f"  {' ' * len(key)}  {cont}")


def print_detection(result: DetectionResult, *, title: str = "Result") -> None:
    """Print overall verdict followed by one row per contributing model."""
    print_section(title)
    print_kv_rows(
        [
            ("Request", result.request_id),
            ("Status", result.status),
            ("Score", format_score(result.score)),
        ]
    )
    if result.models:
        print_section("Models")
        print_kv_rows(
            [
                (m.name, f"{m.status} ({format_score(m.score)})")
                for m in result.models
            ]
        )


def print_learning_hints(hints: list[str], *, title: str = "Next steps") -> None:
    """Print short coaching bullets that explain what to do next."""
    if not hints:
        return
    print_section(title)
    for hint in hints:
        print(f"- {hint}")
