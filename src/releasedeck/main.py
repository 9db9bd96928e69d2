#!/usr/bin/env python3
"""
releasedeck - command line entry point
"""

import argparse
import logging
import os
import signal
import sys
import threading
from typing import List, Optional

from .controller import DashboardController


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    parser = argparse.ArgumentParser(description="releasedeck - Spotify new releases dashboard")
    parser.add_argument("config", help="Path to YAML configuration file")
    parser.add_argument(
        "--once",
        action="store_true",
        help="Update every widget once, print the result and exit",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    logger = logging.getLogger(__name__)

    config_path = os.path.expanduser(args.config)
    if not os.path.exists(config_path):
        logger.error(f"Configuration file not found: {config_path}")
        return 1

    controller = DashboardController(config_path)
    if not controller.setup():
        return 1

    stop_event = threading.Event()

    def signal_handler(signum, frame):
        """Handle shutdown signals gracefully"""
        logger.info(f"Received signal {signum}, shutting down gracefully...")
        stop_event.set()

    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)

    if args.once:
        try:
            for text in controller.run_once(stop_event):
                print(text)
                print()
        finally:
            controller.shutdown()
        return 0

    controller.run(stop_event)
    return 0


if __name__ == "__main__":
    sys.exit(main())
