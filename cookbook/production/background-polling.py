#!/usr/bin/env python3
"""Recipe: Poll for results in the background and react to events.

Problem:
    Your service submits media and must keep doing other work while the
    analysis runs, handling the verdict (or a failure) when it arrives.

Pattern:
    - Submit the file, then start a background poller for its request id.
    - Subscribe to "result" and "error" events.
    - Keep the event loop busy with other work; await the poller at the end.

Run:
    python -m cookbook production/background-polling --input path/to/clip.mp4
    python -m cookbook production/background-polling --request-id <id> --timeout-ms 60000

Success check:
    - Heartbeat lines print while polling runs.
    - Exactly one "result" or "error" notification is printed.
"""

from __future__ import annotations

import argparse
import asyncio
from contextlib import suppress
from pathlib import Path

from cookbook.utils.presentation import (
    print_detection,
    print_header,
    print_kv_rows,
    print_learning_hints,
    print_section,
)
from cookbook.utils.runtime import add_runtime_args, build_client, build_config_or_exit
from realitydefender import (
    Config,
    DetectionResult,
    RealityDefenderError,
    ResultPoller,
)


async def heartbeat(poller: ResultPoller, every_s: float) -> None:
    """Stand-in for the application's other work."""
    while not poller.done:
        print(f"  ... still waiting ({poller.attempts} checks so far)")
        await asyncio.sleep(every_s)


async def main_async(
    *,
    config: Config,
    path: Path | None,
    request_id: str | None,
    timeout_ms: int | None,
) -> int:
    outcome: list[str] = []

    def on_result(result: DetectionResult) -> None:
        outcome.append("result")
        print_detection(result, title="Result event")

    def on_error(error: RealityDefenderError) -> None:
        outcome.append("error")
        print_section("Error event")
        print_kv_rows([("Code", error.code), ("Message", error.message)])

    async with build_client(config) as client:
        if request_id is None:
            assert path is not None
            try:
                upload = await client.upload(path)
            except RealityDefenderError as exc:
                print(f"Upload failed: {exc}")
                return 1
            request_id = upload.request_id
            print_kv_rows([("File", path), ("Request", request_id)])

        poller = client.poll_for_results(request_id, timeout_ms=timeout_ms)
        poller.on("result", on_result).on("error", on_error)

        print_section("Polling")
        beat = asyncio.create_task(
            heartbeat(poller, max(config.polling_interval_ms / 1000, 0.5))
        )
        await poller.wait()
        beat.cancel()
        with suppress(asyncio.CancelledError):
            await beat

    print_learning_hints(
        [
            "Next: lower --timeout-ms to see the timeout error path."
            if outcome == ["result"]
            else "Next: inspect the error code; not_found during polling is retried.",
        ]
    )
    return 0 if outcome == ["result"] else 1


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Submit media and receive its result through event handlers.",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--input", type=Path, help="Media file to upload")
    source.add_argument("--request-id", help="Existing request id to watch")
    parser.add_argument(
        "--timeout-ms",
        type=int,
        default=None,
        help="Total polling budget in milliseconds.",
    )
    add_runtime_args(parser)
    args = parser.parse_args()
    config = build_config_or_exit(args)

    print_header("Background polling", config=config)
    code = asyncio.run(
        main_async(
            config=config,
            path=args.input,
            request_id=args.request_id,
            timeout_ms=args.timeout_ms,
        )
    )
    if code:
        raise SystemExit(code)


if __name__ == "__main__":
    main()
