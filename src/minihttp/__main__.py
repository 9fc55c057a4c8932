"""
=============================================================================
COMMAND-LINE INTERFACE
=============================================================================

Entry point for running the server as a module:

    python -m minihttp --directory /tmp/data

=============================================================================
"""

import argparse
import sys
from typing import List, Optional

from . import __version__
from .config import LOG_FORMATS, ServerConfig
from .server import HTTPServer


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argument parser.

    =========================================================================
    ARGUMENTS
    =========================================================================

    - --directory: Directory served by /files/
    - --host: Server host
    - --port, -p: Server port
    - --log-level, -l: Logging verbosity
    - --log-format: Access log format
    - --version, -v: Show version

    =========================================================================
    """
    parser = argparse.ArgumentParser(
        prog="minihttp",
        description="Minimal HTTP/1.1 server over raw sockets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m minihttp                          # Serve on 0.0.0.0:4221
  python -m minihttp --directory /tmp/data    # Files under /tmp/data
  python -m minihttp --port 8080 -l DEBUG     # Custom port, verbose logs
        """
    )

    parser.add_argument(
        "--directory",
        default="",
        help="Directory for /files/ reads and writes (default: working directory)"
    )

    parser.add_argument(
        "--host",
        default="0.0.0.0",
        help="Host to bind to (default: 0.0.0.0)"
    )

    parser.add_argument(
        "--port", "-p",
        type=int,
        default=4221,
        help="Port to listen on (default: 4221)"
    )

    parser.add_argument(
        "--log-level", "-l",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)"
    )

    parser.add_argument(
        "--log-format",
        choices=LOG_FORMATS,
        default="text",
        help="Access log format (default: text)"
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"minihttp {__version__}"
    )

    return parser


def config_from_args(argv: Optional[List[str]] = None) -> ServerConfig:
    """Parse command-line arguments into a ServerConfig."""
    args = build_parser().parse_args(argv)

    return ServerConfig(
        host=args.host,
        port=args.port,
        directory=args.directory,
        log_level=args.log_level,
        log_format=args.log_format,
    )


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    config = config_from_args(argv)

    try:
        server = HTTPServer(config)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    server.run()


if __name__ == "__main__":
    main()
