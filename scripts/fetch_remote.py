#!/usr/bin/env python3
"""Fetch the remote scoreboard once and show what the sync loop would see.

Prints the normalized state patch for one game, and optionally the raw
remote JSON, so you can spot payload keys that aren't mapped yet.

Usage
-----
Set the remote URL and run::

    export REMOTE_SOURCE_URL="https://example.com/exec"
    python scripts/fetch_remote.py --game 2

Options::

    --url URL            Remote URL (default: $REMOTE_SOURCE_URL)
    --game N             Game index to normalize (default: 1)
    --raw                Also print the raw remote payload
    --verbose, -v        Enable debug logging
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path

import aiohttp

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from rallyboard import HttpRemoteSource, RallyboardTransportError, normalize_remote_payload  # noqa: E402


async def run(url: str, game: int, show_raw: bool) -> int:
    async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=15)) as session:
        try:
            payload = await HttpRemoteSource(url, session).fetch()
        except RallyboardTransportError as exc:
            print(f"Fetch failed: {exc}", file=sys.stderr)
            return 1

    if show_raw:
        print(json.dumps(payload, indent=2, ensure_ascii=False))

    patch = normalize_remote_payload(payload, game)
    if patch is None:
        games = payload.get("games") if isinstance(payload, dict) else None
        available = sorted(games) if isinstance(games, dict) else []
        print(f"No usable data for game_{game} (available: {', '.join(available) or 'none'})", file=sys.stderr)
        return 2

    print(json.dumps(patch, indent=2, ensure_ascii=False))
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Fetch and normalize the remote scoreboard payload.")
    parser.add_argument("--url", default=os.environ.get("REMOTE_SOURCE_URL", ""), help="Remote URL")
    parser.add_argument("--game", type=int, default=1, help="Game index to normalize")
    parser.add_argument("--raw", action="store_true", help="Also print the raw remote payload")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    if not args.url:
        parser.error("no remote URL (pass --url or set REMOTE_SOURCE_URL)")

    sys.exit(asyncio.run(run(args.url, args.game, args.raw)))


if __name__ == "__main__":
    main()
