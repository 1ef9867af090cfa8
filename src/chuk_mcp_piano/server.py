#!/usr/bin/env python3
"""
Entry point for the CHUK Piano MCP Server.

This module provides the main entry point for the MCP server,
supporting multiple transport modes (stdio, http).
"""

import argparse
import asyncio
import logging

from chuk_mcp_piano.constants import DEFAULT_HTTP_PORT, Transport

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Command line options for the server."""
    parser = argparse.ArgumentParser(
        prog="chuk-mcp-piano",
        description="CHUK Piano MCP Server - scales, chords, arpeggios and progressions",
    )
    parser.add_argument(
        "--transport",
        type=Transport,
        choices=list(Transport),
        metavar="{stdio,http}",
        default=Transport.STDIO,
        help="Transport mode (default: stdio)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=DEFAULT_HTTP_PORT,
        help=f"HTTP port (only for http transport, default: {DEFAULT_HTTP_PORT})",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging (generation and session detail)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse options, then serve the piano tools on the chosen transport."""
    args = build_parser().parse_args(argv)

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    # Tools are registered on import; --debug must be set first
    from chuk_mcp_piano.async_server import mcp

    if args.transport is Transport.HTTP:
        logger.info(f"Starting CHUK Piano MCP Server (http:{args.port})")
        asyncio.run(mcp.run_http(port=args.port))
    else:
        logger.info("Starting CHUK Piano MCP Server (stdio)")
        asyncio.run(mcp.run_stdio())


if __name__ == "__main__":
    main()
