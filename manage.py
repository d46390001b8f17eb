#!/usr/bin/env python3
"""
manage.py - Project management entry point

Usage:
    python manage.py                    # Start the API server (default)
    python manage.py web                # Start the API server
    python manage.py web --port 9000    # Start on a given port
    python manage.py web --log-level DEBUG
"""

import argparse
import logging
import sys

from backend.src.web.config import config

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(log_level: str = config.log_level, log_format: str = DEFAULT_LOG_FORMAT) -> None:
    """Configure the root logger for console output."""
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(log_format))
    root_logger.addHandler(console_handler)


def run_web_server(
    host: str = config.host,
    port: int = config.port,
    debug: bool = config.debug,
    log_level: str = config.log_level,
) -> None:
    """Start the API server under uvicorn."""
    setup_logging(log_level)

    import uvicorn
    from backend.src.web.main import app

    print("\n" + "=" * 50)
    print("  Message Board API Server")
    print("=" * 50)
    print(f"  URL: http://{host}:{port}/api")
    print(f"  Stream: http://{host}:{port}/api/stream/messages")
    print(f"  Debug: {'ON' if debug else 'OFF'}")
    print("\nPress Ctrl+C to stop.\n")

    try:
        uvicorn.run(app, host=host, port=port, log_level=log_level.lower())
    except KeyboardInterrupt:
        print("\n\n[INFO] Server stopped")


def main():
    parser = argparse.ArgumentParser(
        description="Message Board API - management entry point",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python manage.py                      # Start the API server
  python manage.py web --port 9000      # Start on port 9000
  python manage.py web --debug          # Debug mode
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parser_web = subparsers.add_parser("web", help="Start the API server")
    parser_web.add_argument("--host", default=config.host, help="Bind address")
    parser_web.add_argument("--port", type=int, default=config.port, help="Port")
    parser_web.add_argument("--debug", action="store_true", help="Enable debug mode")
    parser_web.add_argument(
        "--log-level",
        default=config.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Log level (default: {config.log_level})",
    )

    args = parser.parse_args()

    if not args.command:
        run_web_server()
        return

    if args.command == "web":
        run_web_server(
            host=args.host,
            port=args.port,
            debug=args.debug or config.debug,
            log_level=args.log_level,
        )


if __name__ == "__main__":
    main()
