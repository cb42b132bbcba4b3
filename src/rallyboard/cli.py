"""Command-line entry point: ``python -m rallyboard``.

Usage
-----
Configure through environment variables or options and run::

    export REMOTE_SOURCE_URL="https://example.com/scoreboard.json"
    python -m rallyboard --port 3000

Options::

    --host HOST          Interface to bind (env HOST)
    --port PORT          Listening port (env PORT)
    --data-file PATH     State document (env STATE_FILE)
    --public-dir PATH    Display pages directory (env PUBLIC_DIR)
    --remote-url URL     Remote scoreboard payload (env REMOTE_SOURCE_URL)
    --poll-ms MS         Remote poll interval (env REMOTE_POLL_MS)
    --verbose, -v        Enable debug logging
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from aiohttp import web

from rallyboard.config import ServerConfig
from rallyboard.exceptions import RallyboardError
from rallyboard.server import create_app

_logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rallyboard",
        description="Serve a synchronized scoreboard state to controller and display clients.",
    )
    parser.add_argument("--host", help="Interface to bind (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, help="Listening port (default: 3000)")
    parser.add_argument("--data-file", help="Path of the persisted state document")
    parser.add_argument("--public-dir", help="Directory holding the display pages")
    parser.add_argument("--remote-url", help="Remote scoreboard URL; empty disables sync")
    parser.add_argument("--poll-ms", type=int, help="Remote poll interval in milliseconds")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def config_from_args(args: argparse.Namespace) -> ServerConfig:
    return ServerConfig.from_env(
        host=args.host,
        port=args.port,
        data_file=args.data_file,
        public_dir=args.public_dir,
        remote_source_url=args.remote_url,
        remote_poll_ms=args.poll_ms,
    )


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = config_from_args(args)
        app = create_app(config)
    except RallyboardError as exc:
        _logger.error("Startup failed: %s", exc)
        return 1

    _logger.info("Server listening on http://localhost:%d", config.port)
    web.run_app(app, host=config.host, port=config.port, print=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
