#!/usr/bin/env python3
# -*- coding: utf-8 -*-
from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace

from .app import TopStoriesApp
from .config import load_settings, setup_logging
from .exceptions import ConfigurationError

logger = logging.getLogger("top_stories")


# --- Entrypoint ---
def main() -> None:
    parser = argparse.ArgumentParser(description="Top Stories TUI Client")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--section", type=str, help="Top stories section to show (default: arts)")
    args = parser.parse_args()

    debug_path = setup_logging(args.debug)
    if debug_path:
        print(f"Debug logging enabled: {debug_path}", file=sys.stderr)

    try:
        settings = load_settings()
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}", file=sys.stderr)
        sys.exit(1)

    if args.section:
        settings = replace(settings, section=args.section)
    logger.info("Showing section: %s", settings.section)

    try:
        app = TopStoriesApp(settings=settings)
        app.run()
    except Exception as e:
        logger.exception("Application crashed: %s", e)
        print(f"Application crashed: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
