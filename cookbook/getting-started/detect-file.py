#!/usr/bin/env python3
"""Recipe: Upload one file and wait for its authenticity verdict.

Problem:
    You have a single image, video, audio clip, or text file and want to know
    whether it has been manipulated.

When to use:
    - You are trying the service for the first time.
    - You want the per-model breakdown for one piece of media.

When not to use:
    - You cannot block while analysis runs (use production/background-polling).

Run:
    python -m cookbook getting-started/detect-file --input path/to/photo.jpg

Success check:
    - Status is AUTHENTIC, MANIPULATED, or another terminal label.
    - Output lists a score and the models that contributed to it.
"""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path

from cookbook.utils.presentation import (
    print_detection,
    print_header,
    print_kv_rows,
    print_learning_hints,
    print_section,
)
from cookbook.utils.runtime import add_runtime_args, build_client, build_config_or_exit
from realitydefender import Config, RealityDefenderError


async def main_async(path: Path, *, config: Config, max_attempts: int | None) -> int:
    async with build_client(config) as client:
        try:
            upload = await client.upload(path)
            print_section("Upload")
            print_kv_rows([("File", path), ("Request", upload.request_id)])
            result = await client.get_result(
                upload.request_id, max_attempts=max_attempts
            )
        except RealityDefenderError as exc:
            print_section("Failed")
            print_kv_rows([("Code", exc.code), ("Message", exc.message)])
            if exc.hint:
                print_kv_rows([("Hint", exc.hint)])
            return 1

    print_detection(result)
    print_learning_hints(
        [
            (
                "Next: raise --max-attempts; analysis was still running."
                if result.status == "ANALYZING"
                else "Next: try production/background-polling to avoid blocking."
            ),
        ]
    )
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Upload one file and print its detection result.",
    )
    parser.add_argument("--input", type=Path, required=True, help="Media file path")
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=None,
        help="Stop polling after this many checks (default: until finished).",
    )
    add_runtime_args(parser)
    args = parser.parse_args()

    if not args.input.exists():
        raise SystemExit(f"File not found: {args.input}")
    config = build_config_or_exit(args)

    print_header("Detect a single file", config=config)
    code = asyncio.run(
        main_async(args.input, config=config, max_attempts=args.max_attempts)
    )
    if code:
        raise SystemExit(code)


if __name__ == "__main__":
    main()
