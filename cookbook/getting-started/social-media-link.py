#!/usr/bin/env python3
"""Recipe: Analyze a social-media post by link.

Problem:
    The media you want checked lives on a public social platform and you do
    not have the file locally.

When to use:
    - You have a public post URL (YouTube, X, Instagram, TikTok, ...).

Run:
    python -m cookbook getting-started/social-media-link --link https://www.youtube.com/watch?v=6O0fySNw-Lw

Success check:
    - A request id is printed right after submission.
    - A terminal status and score follow once analysis finishes.
"""

from __future__ import annotations

import argparse
import asyncio

from cookbook.utils.presentation import (
    print_detection,
    print_header,
    print_kv_rows,
    print_section,
)
from cookbook.utils.runtime import add_runtime_args, build_client, build_config_or_exit
from realitydefender import Config, RealityDefenderError


async def main_async(link: str, *, config: Config) -> int:
    async with build_client(config) as client:
        try:
            upload = await client.upload_social_media(link)
            print_section("Submitted")
            print_kv_rows([("Link", link), ("Request", upload.request_id)])
            result = await client.get_result(upload.request_id)
        except RealityDefenderError as exc:
            print_section("Failed")
            print_kv_rows([("Code", exc.code), ("Message", exc.message)])
            return 1

    print_detection(result)
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Submit a social-media link and print its detection result.",
    )
    parser.add_argument("--link", required=True, help="Public post URL")
    add_runtime_args(parser)
    args = parser.parse_args()
    config = build_config_or_exit(args)

    print_header("Social media link", config=config)
    code = asyncio.run(main_async(args.link, config=config))
    if code:
        raise SystemExit(code)


if __name__ == "__main__":
    main()
