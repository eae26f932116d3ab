"""
Inventory Service — Server Launcher
====================================

What:  Command-line entry point: parse flags, prepare the cache directory,
       run the app with uvicorn.

Usage:
    inventory-service -h 127.0.0.1 -p 3000 -c ./cache

All three flags are required (-h is the host, so help is --help only).
If the cache directory cannot be created the process exits with status 1.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import uvicorn
from pydantic import ValidationError as SettingsValidationError

from inventory_app.config import Settings
from inventory_app.main import create_app

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="inventory-service",
        description="In-memory inventory HTTP service with on-disk photo cache.",
        add_help=False,
    )
    parser.add_argument("--help", action="help", help="show this help message and exit")
    parser.add_argument("-h", "--host", required=True, help="server address")
    parser.add_argument("-p", "--port", required=True, type=int, help="server port")
    parser.add_argument("-c", "--cache", required=True, help="path to the photo cache directory")
    return parser


def prepare_cache_dir(path: str) -> Path:
    """
    Create the cache directory (with parents) if absent.

    Raises:
        OSError: the directory cannot be created
    """
    cache = Path(path)
    cache.mkdir(parents=True, exist_ok=True)
    return cache.resolve()


def main(argv: Optional[List[str]] = None) -> int:
    """Parse flags, prepare the cache directory and serve until stopped."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        settings = Settings(host=args.host, port=args.port, cache_dir=args.cache)
    except SettingsValidationError as e:
        logger.error("Invalid configuration: %s", e)
        return 2

    try:
        cache = prepare_cache_dir(settings.cache_dir)
    except OSError as e:
        logger.error("Failed to create cache directory %s: %s", settings.cache_dir, e)
        return 1
    logger.info("Cache directory ready: %s", cache)

    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
    return 0


def run() -> None:
    """Console-script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
