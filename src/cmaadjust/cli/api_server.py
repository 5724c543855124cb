#!/usr/bin/env python
"""
CLI for running the Adjustment API Server.

Usage:
    python -m cmaadjust.cli.api_server
    python -m cmaadjust.cli.api_server --port 8080
    python -m cmaadjust.cli.api_server --db data/cma.db --debug
"""

import argparse
import sys

from cmaadjust.config import get_config
from cmaadjust.core.models import DEFAULT_ADJUSTMENT_RATES
from cmaadjust.exceptions import CmaAdjustError
from cmaadjust.logging_config import setup_logging, get_logger


def describe_rates(rates=DEFAULT_ADJUSTMENT_RATES) -> str:
    """One-line summary of a rate table for the startup log."""
    return ", ".join(f"{name}={value:g}" for name, value in rates.to_dict().items())


def main():
    """Main entry point for the API server CLI."""
    parser = argparse.ArgumentParser(
        description="CMA Adjustment API Server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m cmaadjust.cli.api_server
    python -m cmaadjust.cli.api_server --port 8080
    python -m cmaadjust.cli.api_server --host 0.0.0.0 --db data/cma.db
        """,
    )
    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Host to bind to (default: from config or 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to bind to (default: from config or 5000)",
    )
    parser.add_argument(
        "--db",
        type=str,
        default=None,
        help="Adjustments database file (default: CMAADJUST_DB_PATH)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set log level",
    )

    args = parser.parse_args()

    setup_logging(level=args.log_level, force=True)
    logger = get_logger(__name__)

    try:
        config = get_config()
        host = args.host or config.api.host
        port = args.port or config.api.port
        debug = args.debug or config.api.debug
        db_path = args.db or config.database.path

        logger.info("=" * 50)
        logger.info("CMA Adjustment API Server")
        logger.info("Listening on http://%s:%d (debug: %s)", host, port, debug)
        logger.info("Adjustments database: %s", db_path)
        logger.info("Default rates: %s", describe_rates())
        logger.info("=" * 50)

        from cmaadjust.api.server import run_server
        run_server(host=host, port=port, debug=debug, db_path=db_path)
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
        sys.exit(0)
    except CmaAdjustError as e:
        logger.error("Server error: %s", e, exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
