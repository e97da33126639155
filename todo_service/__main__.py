"""Entry point for running the todo service."""

import argparse
import logging

from .config import LOG_LEVELS, get_config
from .server import run_server


def main():
    config = get_config()

    parser = argparse.ArgumentParser(
        description="Todo Service - in-memory task list over Connect JSON"
    )
    parser.add_argument(
        "--host",
        default=config.host,
        help=f"Host to bind to (default: {config.host})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=config.port,
        help=f"Port to listen on (default: {config.port})",
    )
    parser.add_argument(
        "--allowed-origin",
        action="append",
        dest="allowed_origins",
        help="CORS origin allowed to call the API; repeat for several "
        f"(default: {', '.join(config.allowed_origins)})",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=config.log_level,
        help=f"Log level (default: {config.log_level})",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    run_server(
        host=args.host,
        port=args.port,
        allowed_origins=args.allowed_origins or config.allowed_origins,
        log_level=args.log_level,
    )


if __name__ == "__main__":
    main()
