#!/usr/bin/env python3
"""
Entry point for the CHUK Music Atlas MCP Server.

Runs the music theory tools over stdio or http. Project chord files
(YAML or JSON) are read from ./chords unless --chords-dir points
somewhere else; they override library chords with the same chord_id.
"""

import argparse
import asyncio
import logging
import os

from chuk_mcp_music_atlas.constants import CHORDS_DIR_ENV

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="CHUK Music Atlas MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="Transport mode (default: stdio)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="HTTP port (only for http transport)",
    )
    parser.add_argument(
        "--chords-dir",
        default=None,
        help="Directory of project chord files (default: ./chords)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main() -> None:
    """Parse arguments, load the chord dictionary and serve."""
    args = build_parser().parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.chords_dir:
        os.environ[CHORDS_DIR_ENV] = args.chords_dir

    # Importing the server module loads the chord dictionary
    from chuk_mcp_music_atlas.async_server import chord_dictionary, mcp

    logger.info("Serving %d chords", len(chord_dictionary))
    if args.transport == "stdio":
        logger.info("Starting CHUK Music Atlas MCP Server (stdio)")
        asyncio.run(mcp.run_stdio())
    else:
        logger.info("Starting CHUK Music Atlas MCP Server (http:%d)", args.port)
        asyncio.run(mcp.run_http(port=args.port))


if __name__ == "__main__":
    main()
