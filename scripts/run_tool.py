#!/usr/bin/env python3
"""Stream an AI tool run from a toolstream server to the terminal.

Usage:
    python scripts/run_tool.py title-generator --input topic="home espresso" --input platform=YouTube
    python scripts/run_tool.py --list

Press Ctrl-C while streaming to cancel the run.
"""

import argparse
import asyncio
import signal
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import httpx

from toolstream.client.relay import ToolRelayClient
from toolstream.services.output_parser import format_value


def parse_inputs(pairs):
    inputs = {}
    for pair in pairs:
        if "=" not in pair:
            raise SystemExit(f"Invalid --input {pair!r}, expected name=value")
        name, value = pair.split("=", 1)
        inputs[name.strip()] = value
    return inputs


async def list_tools(base_url: str) -> int:
    async with httpx.AsyncClient(base_url=base_url) as client:
        response = await client.get("/tools")
        response.raise_for_status()
        for item in response.json()["items"]:
            print(f"{item['slug']:<30} {item['name']}")
    return 0


async def run(base_url: str, slug: str, inputs, formatted: bool) -> int:
    cancel = asyncio.Event()
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, cancel.set)
    except NotImplementedError:
        # Windows: Ctrl-C falls back to KeyboardInterrupt
        pass

    def _write(text: str) -> None:
        if not formatted:
            sys.stdout.write(text)
            sys.stdout.flush()

    async with ToolRelayClient(base_url) as client:
        result = await client.run(slug, inputs, on_text=_write, cancel=cancel)

    if not formatted:
        print()

    if result.status == "cancelled":
        print(result.error, file=sys.stderr)
        return 130
    if not result.ok:
        print(f"Error: {result.error}", file=sys.stderr)
        return 1

    if formatted:
        view = result.view()
        if view.type == "jsonl" or view.type == "json-array":
            for index, item in enumerate(view.items or [], start=1):
                if isinstance(item, dict):
                    print(f"#{index}")
                    for key, value in item.items():
                        print(f"  {key}: {format_value(value)}")
                else:
                    print(f"#{index} {format_value(item)}")
        elif view.type == "json-object":
            for key, value in (view.data or {}).items():
                print(f"{key}: {format_value(value)}")
        else:
            print(view.content or "")
    return 0


def main():
    parser = argparse.ArgumentParser(description="Run an AI tool and stream its output")
    parser.add_argument("slug", nargs="?", help="Tool identifier, e.g. title-generator")
    parser.add_argument(
        "--input",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Tool input value (repeatable)",
    )
    parser.add_argument(
        "--base-url",
        default="http://localhost:8000",
        help="toolstream server URL (default: http://localhost:8000)",
    )
    parser.add_argument("--list", action="store_true", help="List available tools and exit")
    parser.add_argument(
        "--formatted",
        action="store_true",
        help="Wait for completion and print structured (JSON/JSONL) output as fields",
    )

    args = parser.parse_args()

    if args.list:
        sys.exit(asyncio.run(list_tools(args.base_url)))
    if not args.slug:
        parser.error("slug is required unless --list is given")

    sys.exit(asyncio.run(run(args.base_url, args.slug, parse_inputs(args.input), args.formatted)))


if __name__ == "__main__":
    main()
