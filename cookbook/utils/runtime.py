"""Shared runtime helpers for cookbook recipes."""

from __future__ import annotations

import argparse
import sys

from realitydefender import Config, RealityDefender, RealityDefenderError


def add_runtime_args(parser: argparse.ArgumentParser) -> None:
    """Add common connection/polling arguments to a recipe parser."""
    parser.add_argument(
        "--api-key",
        default=None,
        help="Optional API key override. Usually read from REALITY_DEFENDER_API_KEY.",
    )
    parser.add_argument(
        "--base-url",
        default=None,
        help="Optional API base URL override (REALITY_DEFENDER_BASE_URL).",
    )
    parser.add_argument(
        "--polling-interval-ms",
        type=int,
        default=None,
        help="Delay between result checks in milliseconds.",
    )


def build_config_or_exit(args: argparse.Namespace) -> Config:
    """Build Config from parsed args, exiting with a concise actionable error."""
    overrides = {}
    if getattr(args, "polling_interval_ms", None) is not None:
        overrides["polling_interval_ms"] = args.polling_interval_ms
    try:
        return Config(api_key=args.api_key, base_url=args.base_url, **overrides)
    except RealityDefenderError as exc:
        hint = f" Hint: {exc.hint}" if exc.hint else ""
        print(f"Configuration error: {exc}.{hint}", file=sys.stderr)
        raise SystemExit(2) from exc


def build_client(config: Config) -> RealityDefender:
    """Create the client used by a recipe."""
    return RealityDefender(config)


def print_run_mode(config: Config) -> None:
    """Print a compact runtime mode line for recipe users."""
    print(
        f"Endpoint: {config.base_url} | polling_interval={config.polling_interval_ms}ms"
        f" | timeout={config.timeout_ms}ms"
    )
