"""
=============================================================================
SERVER CONFIGURATION
=============================================================================

All runtime settings in one dataclass, built from the command line by
minihttp.__main__ and validated once at startup.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    WHERE SETTINGS COME FROM                         │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   1. Command-line arguments                                          │
    │      └── python -m minihttp --directory /tmp/data --port 4221        │
    │                                                                      │
    │   2. Default values (in this dataclass)                              │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Environment variables are not consulted.

=============================================================================
"""

from dataclasses import dataclass
from typing import Optional


LOG_FORMATS = ("text", "json")


@dataclass
class ServerConfig:
    """
    Configuration for the HTTP server.

    =========================================================================
    CONFIGURATION GROUPS
    =========================================================================

    NETWORK SETTINGS
    - host, port, backlog, buffer_size, timeout

    FILES
    - directory

    LOGGING
    - log_level, log_format

    =========================================================================
    """

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK SETTINGS
    # ─────────────────────────────────────────────────────────────────────

    host: str = "0.0.0.0"
    """The IP address to bind to. All interfaces by default."""

    port: int = 4221
    """
    The port number to listen on.
    0 lets the OS pick a free port (see SocketServer.bound_address).
    """

    backlog: int = 128
    """Maximum number of queued connections."""

    buffer_size: int = 1024
    """
    Size of the single read per connection, in bytes.
    A request longer than this is truncated.
    """

    timeout: Optional[float] = None
    """
    Socket timeout for client reads and writes, in seconds.
    None = block until the client sends or disconnects. A timeout that
    fires is a transport error and terminates the server.
    """

    # ─────────────────────────────────────────────────────────────────────
    # FILES
    # ─────────────────────────────────────────────────────────────────────

    directory: str = ""
    """
    Directory served by /files/. Empty means the process working
    directory.
    """

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "INFO"
    """Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."""

    log_format: str = "text"
    """
    Access log format: 'json' or 'text'.
    JSON is better for log aggregators, text for humans.
    """

    def validate(self) -> None:
        """
        Validate configuration values.

        Raises:
            ValueError: On the first invalid setting.
        """
        if not 0 <= self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}. Must be 0-65535.")

        if self.backlog < 0:
            raise ValueError("backlog must be >= 0")

        if self.buffer_size < 64:
            raise ValueError("buffer_size must be >= 64")

        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be > 0")

        if self.log_format not in LOG_FORMATS:
            raise ValueError(
                f"Invalid log_format: {self.log_format!r}. "
                f"Must be one of {', '.join(LOG_FORMATS)}."
            )
