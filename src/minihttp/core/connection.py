"""
=============================================================================
CONNECTION MANAGEMENT
=============================================================================

Wraps one accepted client socket for the lifetime of a single
request/response exchange.

=============================================================================
ONE READ, ONE WRITE
=============================================================================

TCP is a byte stream and does not preserve message boundaries, so a
general-purpose server has to buffer until it sees "\r\n\r\n" and then
honor Content-Length. This server does not:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                     CONNECTION LIFECYCLE                            │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   accept()                                                           │
    │      │                                                               │
    │      ▼                                                               │
    │   read_request()     ONE recv(buffer_size), default 1024 bytes       │
    │      │                                                               │
    │      ▼                                                               │
    │   parse + route      (done by the HTTP server)                       │
    │      │                                                               │
    │      ▼                                                               │
    │   send_response()    ONE sendall() of the serialized response        │
    │      │                                                               │
    │      ▼                                                               │
    │   close()            no keep-alive, ever                             │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Whatever the first recv() returns is the whole request. Anything the client
sends after that, or anything past buffer_size, is never looked at.

=============================================================================
ERRORS
=============================================================================

A socket error while reading or writing is raised as TransportError. The
HTTP server treats it as fatal for the whole process. A clean EOF before
any bytes arrive is NOT an error: read_request() returns b"" and the
connection is simply closed.

=============================================================================
"""

import logging
import socket
import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


logger = logging.getLogger(__name__)


class TransportError(OSError):
    """
    A socket-level failure: bind, accept, read or write.

    Subclasses OSError so callers that already catch OSError keep working.
    """


class ConnectionState(Enum):
    """Connection lifecycle states, for logging."""
    NEW = "new"                # Just accepted
    READING = "reading"        # Waiting on recv()
    PROCESSING = "processing"  # Handler is running
    WRITING = "writing"        # Inside sendall()
    CLOSED = "closed"          # Socket released


@dataclass
class Connection:
    """
    Represents a client connection.

    Attributes:
        socket: The client socket.
        address: Client's (ip, port) tuple.
        id: Short connection identifier for log lines.
        state: Current connection state.
        created_at: Timestamp when the connection was accepted.
        buffer_size: Size of the single read.
        timeout: Per-operation socket timeout in seconds, None to block.
    """

    socket: socket.socket
    address: tuple[str, int]

    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    state: ConnectionState = ConnectionState.NEW
    created_at: float = field(default_factory=time.time)

    buffer_size: int = 1024
    timeout: Optional[float] = None

    def __post_init__(self):
        # Accepted sockets inherit the listener's accept-poll timeout.
        self.socket.settimeout(self.timeout)

    @property
    def client_ip(self) -> str:
        """Get the client IP address."""
        return self.address[0]

    @property
    def age(self) -> float:
        """Get connection age in seconds."""
        return time.time() - self.created_at

    def read_request(self) -> bytes:
        """
        Read the request with a single recv().

        Returns:
            Up to buffer_size bytes, or b"" if the client closed without
            sending anything.

        Raises:
            TransportError: On any socket error, including a timeout.
        """
        self.state = ConnectionState.READING

        try:
            data = self.socket.recv(self.buffer_size)
        except OSError as e:
            raise TransportError(f"[{self.id}] Read failed: {e}") from e

        if not data:
            logger.debug(f"[{self.id}] Client closed before sending a request")
        else:
            logger.debug(f"[{self.id}] Read {len(data)} bytes")

        self.state = ConnectionState.PROCESSING
        return data

    def send_response(self, data: bytes) -> None:
        """
        Send the serialized response.

        Uses sendall() so a partial write is never mistaken for success.

        Raises:
            TransportError: If the peer is gone or the write fails.
        """
        self.state = ConnectionState.WRITING

        try:
            self.socket.sendall(data)
        except OSError as e:
            raise TransportError(f"[{self.id}] Send failed: {e}") from e

        logger.debug(f"[{self.id}] Sent {len(data)} bytes")

    def close(self):
        """
        Close the connection.

        shutdown(SHUT_RDWR) first so the client sees EOF right away, then
        release the descriptor. Errors here are ignored: the peer may
        already be gone.
        """
        if self.state == ConnectionState.CLOSED:
            return

        try:
            self.socket.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass

        try:
            self.socket.close()
        except OSError:
            pass

        self.state = ConnectionState.CLOSED
        logger.debug(f"[{self.id}] Connection closed after {self.age:.3f}s")

    def __enter__(self):
        """
        Context manager entry.

            with conn:
                data = conn.read_request()
                conn.send_response(response)
            # Connection closed here, even if a TransportError escaped
        """
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - ensure connection is closed."""
        self.close()
        return False
