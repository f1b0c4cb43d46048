"""Cookbook runner module.

Runs recipe scripts under ``cookbook/`` from a dev install
(``pip install -e .``). Recipe flags pass straight through.

Examples:
- python -m cookbook --list
- python -m cookbook getting-started/detect-file --input path/to/photo.jpg
- python -m cookbook production.background_polling --request-id abc123
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass
import os
from pathlib import Path
import runpy
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

COOKBOOK_ROOT = Path(__file__).resolve().parent
REPO_ROOT = COOKBOOK_ROOT.parent
EXCLUDE_DIRS = {"utils", "__pycache__"}
START_HERE = "getting-started/detect-file.py"


@dataclass(frozen=True)
class Recipe:
    """A runnable recipe file and its cookbook-relative name."""

    path: Path
    display: str

    @property
    def category(self) -> str:
        head, _, rest = self.display.partition("/")
        return head if rest else ""

    def description(self) -> str:
        """Return the ``Recipe: ...`` line of the module docstring, if any."""
        try:
            head = self.path.read_text().split("\n", 10)
        except OSError:
            return ""
        for line in head:
            stripped = line.strip().strip("\"'")
            if stripped.startswith("Recipe:"):
                return stripped.removeprefix("Recipe:").strip().rstrip(".")
        return ""


def _as_recipe(path: Path) -> Recipe | None:
    if path.suffix != ".py" or not path.is_file():
        return None
    if not path.is_relative_to(COOKBOOK_ROOT):
        return None
    rel = path.relative_to(COOKBOOK_ROOT)
    if path.name.startswith("__") or any(p in EXCLUDE_DIRS for p in rel.parts):
        return None
    return Recipe(path=path, display=rel.as_posix())


def list_recipes() -> list[Recipe]:
    """Discover recipe files, sorted by display name."""
    found = (_as_recipe(p) for p in COOKBOOK_ROOT.rglob("*.py"))
    return sorted((r for r in found if r is not None), key=lambda r: r.display)


def resolve_spec(spec: str) -> Recipe:
    """Resolve a user-provided spec to a recipe inside the cookbook.

    Accepts ``cookbook/production/x.py``, ``production/x`` and the dotted form
    ``production.x_y`` (mapped to ``production/x-y.py``).
    """
    rel = spec.removeprefix("cookbook/").removeprefix("cookbook\\")
    candidates = [REPO_ROOT / spec, COOKBOOK_ROOT / rel]
    if not rel.endswith(".py"):
        candidates.append(COOKBOOK_ROOT / f"{rel}.py")
        dotted = rel.replace(".", "/").replace("_", "-")
        candidates.append(COOKBOOK_ROOT / f"{dotted}.py")

    for candidate in candidates:
        recipe = _as_recipe(candidate.resolve())
        if recipe is not None:
            return recipe

    raise FileNotFoundError(
        f"Recipe not found: {spec}. Use --list to view available recipes."
    )


def print_recipe_list(recipes: Iterable[Recipe]) -> None:
    """Print recipes grouped by category with their one-line descriptions."""
    current: str | None = None
    for recipe in recipes:
        if recipe.category != current:
            current = recipe.category
            heading = current.replace("-", " ").title() if current else "Recipes"
            print(f"\n  {heading}")
        name = recipe.display.removesuffix(".py")
        marker = "  <- start here" if recipe.display == START_HERE else ""
        desc = recipe.description()
        print(f"    {name:<40s} {desc}{marker}" if desc else f"    {name}{marker}")
    print("\n  Run:   python -m cookbook <recipe> [recipe flags]\n")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m cookbook",
        description="Reality Defender Cookbook: recipes for media authenticity checks.",
    )
    parser.add_argument("spec", nargs="?", help="Recipe to run")
    parser.add_argument("--list", action="store_true", help="List recipes and exit")
    parser.add_argument(
        "--cwd-repo-root",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Run the recipe from the repository root (default: enabled)",
    )
    return parser


def _recipe_help_target(argv: Sequence[str]) -> str | None:
    """Return the recipe spec when ``--help`` follows it, else None."""
    for arg in argv:
        if arg in ("-h", "--help"):
            return None
        if not arg.startswith("-"):
            return arg if {"-h", "--help"} & set(argv) else None
    return None


def run_recipe(
    recipe: Recipe, passthrough: Sequence[str], *, cwd_repo_root: bool = False
) -> int:
    """Execute *recipe* in-process with ``sys.argv`` set as for a direct run."""
    try:
        import realitydefender as _realitydefender  # noqa: F401
    except ImportError:
        print(
            "Error: could not import realitydefender. Run 'pip install -e .' first.",
            file=sys.stderr,
        )
        return 1

    prev_argv, prev_cwd = list(sys.argv), Path.cwd()
    sys.argv = [str(recipe.path), *passthrough]
    try:
        if cwd_repo_root:
            os.chdir(REPO_ROOT)
        runpy.run_path(str(recipe.path), run_name="__main__")
    finally:
        os.chdir(prev_cwd)
        sys.argv = prev_argv
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    raw = list(argv) if argv is not None else sys.argv[1:]

    help_target = _recipe_help_target(raw)
    if help_target is not None:
        try:
            return run_recipe(resolve_spec(help_target), ["--help"])
        except FileNotFoundError as exc:
            print(str(exc), file=sys.stderr)
            return 2

    if "--" in raw:
        idx = raw.index("--")
        args = _build_parser().parse_args(raw[:idx])
        passthrough = raw[idx + 1 :]
    else:
        args, passthrough = _build_parser().parse_known_args(raw)

    if args.list:
        print_recipe_list(list_recipes())
        return 0
    if not args.spec:
        print(
            "\nReality Defender Cookbook\n"
            f"\n  Start here:    python -m cookbook {START_HERE.removesuffix('.py')}"
            " --input photo.jpg"
            "\n  List recipes:  python -m cookbook --list\n"
        )
        return 0

    try:
        recipe = resolve_spec(args.spec)
    except FileNotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return 2
    return run_recipe(recipe, passthrough, cwd_repo_root=args.cwd_repo_root)


if __name__ == "__main__":  # pragma: no cover - direct execution guard
    raise SystemExit(main())
