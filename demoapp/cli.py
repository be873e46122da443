# demoapp MCP - Project-scoped tool server
# Copyright (C) 2026 demoapp Authors
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

logger = logging.getLogger("demoapp.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="demoapp-mcp",
        description="demoapp - project-scoped MCP tool server (stdio)",
    )
    parser.add_argument(
        "--root",
        default=None,
        help="Root directory the tools may touch (default: DEMOAPP_ROOT or the current directory)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (default: DEMOAPP_LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        default=None,
        help="Write rotated JSON logs to this directory (default: DEMOAPP_LOG_DIR, disabled if unset)",
    )
    return parser


def cli_main(argv: list[str] | None = None) -> None:
    from dotenv import load_dotenv

    load_dotenv()

    from demoapp.config import load_settings
    from demoapp.exceptions import ConfigError
    from demoapp.logging_config import setup_logging

    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(
            root=args.root,
            log_level=args.log_level,
            log_dir=args.log_dir,
        )
    except ConfigError as exc:
        setup_logging()
        logger.error("Invalid configuration: %s", exc)
        sys.exit(2)

    setup_logging(
        level=settings.log_level,
        log_dir=settings.log_dir,
        json_file=settings.log_json,
    )

    from demoapp.mcp.server import serve

    asyncio.run(serve(settings))


if __name__ == "__main__":
    cli_main()
