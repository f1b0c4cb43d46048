#!/usr/bin/env python3
"""Recipe: Page through past detection results.

Problem:
    You submitted media earlier and want to review what came back, optionally
    narrowed by name or date range.

When to use:
    - Auditing recent submissions.
    - Finding a request id you did not record.

Run:
    python -m cookbook getting-started/list-results --size 5
    python -m cookbook getting-started/list-results --name clip --start-date 2025-01-01

Success check:
    - Page counters are printed.
    - Each row shows a status and score.
"""

from __future__ import annotations

import argparse
import asyncio
from datetime import date

from cookbook.utils.presentation import (
    format_score,
    print_header,
    print_kv_rows,
    print_learning_hints,
    print_section,
)
from cookbook.utils.runtime import add_runtime_args, build_client, build_config_or_exit
from realitydefender import Config, RealityDefenderError


async def main_async(args: argparse.Namespace, *, config: Config) -> int:
    async with build_client(config) as client:
        try:
            page = await client.get_results(
                args.page,
                args.size,
                name=args.name,
                start_date=args.start_date,
                end_date=args.end_date,
                max_attempts=args.max_attempts,
            )
        except RealityDefenderError as exc:
            print_section("Failed")
            print_kv_rows([("Code", exc.code), ("Message", exc.message)])
            return 1

    print_section("Page")
    print_kv_rows(
        [
            ("Page", f"{page.current_page + 1} of {max(page.total_pages, 1)}"),
            ("Items on page", page.current_page_items_count),
            ("Total items", page.total_items),
        ]
    )
    print_section("Results")
    if not page.items:
        print("- (none)")
    print_kv_rows(
        [
            (item.request_id or "?", f"{item.status} ({format_score(item.score)})")
            for item in page.items
        ]
    )
    if page.current_page + 1 < page.total_pages:
        print_learning_hints([f"Next: rerun with --page {page.current_page + 1}."])
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="List past detection results.")
    parser.add_argument("--page", type=int, default=0, help="Zero-based page number")
    parser.add_argument("--size", type=int, default=10, help="Items per page")
    parser.add_argument("--name", default=None, help="Filter by media name")
    parser.add_argument("--start-date", type=date.fromisoformat, default=None)
    parser.add_argument("--end-date", type=date.fromisoformat, default=None)
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=3,
        help="Retry budget for the page request.",
    )
    add_runtime_args(parser)
    args = parser.parse_args()
    config = build_config_or_exit(args)

    print_header("Past results", config=config)
    code = asyncio.run(main_async(args, config=config))
    if code:
        raise SystemExit(code)


if __name__ == "__main__":
    main()
