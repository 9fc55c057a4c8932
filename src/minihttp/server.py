"""
=============================================================================
HTTP SERVER
=============================================================================

Ties the pieces together: SocketServer accepts, one thread per connection
reads a single request, the router (wrapped in middleware) builds the
response, and the connection is closed.

=============================================================================
REQUEST LIFECYCLE
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                      ONE CONNECTION                                  │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   accept thread                                                      │
    │      SocketServer._accept_loop()                                     │
    │          │                                                           │
    │          └──► _handle_connection(conn)  spawn thread, return         │
    │                                                                      │
    │   connection thread                                                  │
    │      _process_connection(conn)                                       │
    │          │                                                           │
    │          ├──► conn.read_request()       one recv()                   │
    │          │       └── b""                close, nothing sent          │
    │          ├──► parser.parse()                                         │
    │          │       └── HTTPParseError     bare 400                     │
    │          ├──► handler(request)          middleware → router          │
    │          │       └── exception          bare 500                     │
    │          ├──► conn.send_response()      one sendall()                │
    │          └──► conn.close()                                           │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
FATAL ERRORS
=============================================================================

A TransportError anywhere (bind, accept, recv, send) is handed to the
server's fatal-error policy. The default policy logs at CRITICAL and ends
the whole process with exit status 1 through os._exit(), which works from
any thread. Tests pass their own policy to record the error instead.

=============================================================================
"""

import logging
import os
import threading
from typing import Callable, Optional, Tuple

from .config import ServerConfig
from .core import Connection, SocketServer, TransportError
from .http import HTTPParseError, HTTPRequest, HTTPResponse, RequestParser, Router
from .http.response import bad_request, internal_error
from .middleware import LoggingMiddleware, MiddlewarePipeline
from .routes import build_router


logger = logging.getLogger(__name__)


FatalPolicy = Callable[[BaseException], None]


def exit_on_fatal(error: BaseException) -> None:
    """Default fatal-error policy: log and terminate the process."""
    logger.critical(f"Fatal transport error, exiting: {error}")
    os._exit(1)


class HTTPServer:
    """
    HTTP/1.1 server with one request per connection.

        config = ServerConfig(port=4221, directory="/tmp/data")
        server = HTTPServer(config)
        server.run()   # blocks until SIGINT/SIGTERM or shutdown()

    Args:
        config: Server configuration. Defaults are used if not provided.
        router: Route table. Defaults to the built-in routes.
        on_fatal: Called with the TransportError that ended the server.
    """

    def __init__(
        self,
        config: Optional[ServerConfig] = None,
        router: Optional[Router] = None,
        on_fatal: Optional[FatalPolicy] = None,
    ):
        self.config = config or ServerConfig()
        self.config.validate()

        self._socket_server = SocketServer(self.config)
        self._parser = RequestParser(directory=self.config.directory)

        self._router = router if router is not None else build_router()
        self._middleware = MiddlewarePipeline()
        self._middleware.add(LoggingMiddleware(log_format=self.config.log_format))

        self._on_fatal: FatalPolicy = on_fatal or exit_on_fatal

        # middleware.wrap(router.handle), built in run()
        self._handler: Optional[Callable[[HTTPRequest], HTTPResponse]] = None

    @property
    def bound_address(self) -> Optional[Tuple[str, int]]:
        """Address the listener bound to, None before run() binds."""
        return self._socket_server.bound_address

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        """Block until the server is accepting connections."""
        return self._socket_server.wait_until_ready(timeout)

    # =========================================================================
    # SERVER LIFECYCLE
    # =========================================================================

    def run(self):
        """
        Start the server (blocking).

        Returns after shutdown() or a signal. A bind or accept failure goes
        to the fatal-error policy.
        """
        self._setup_logging()

        self._handler = self._middleware.wrap(self._router.handle)

        logger.info(
            f"Starting HTTP server on {self.config.host}:{self.config.port} "
            f"(directory={self.config.directory or '.'})"
        )
        self._router.log_routes()

        try:
            self._socket_server.start(self._handle_connection)
        except TransportError as e:
            self._fatal(e)
            return

        logger.info("Server stopped")

    def shutdown(self):
        """
        Stop accepting connections.

        Connections already being served run to completion on their own
        threads.
        """
        self._socket_server.shutdown()

    def _setup_logging(self):
        """Configure logging based on config."""
        level = getattr(logging, self.config.log_level.upper(), logging.INFO)

        logging.basicConfig(
            level=level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        logging.getLogger("minihttp").setLevel(level)

    def _fatal(self, error: BaseException):
        self._on_fatal(error)

    # =========================================================================
    # REQUEST HANDLING
    # =========================================================================

    def _handle_connection(self, conn: Connection):
        """
        Serve a connection on its own thread.

        Called by SocketServer on the accept thread; returns immediately.
        Threads are daemons so a stuck client cannot hold the process open.
        """
        thread = threading.Thread(
            target=self._process_connection,
            args=(conn,),
            name=f"conn-{conn.id}",
            daemon=True,
        )
        thread.start()

    def _process_connection(self, conn: Connection):
        """Read one request, answer it, close (runs in its own thread)."""
        try:
            with conn:
                raw_request = conn.read_request()
                if not raw_request:
                    return

                response = self._respond(raw_request, conn)
                conn.send_response(response.to_bytes())
        except TransportError as e:
            self._fatal(e)

    def _respond(self, raw_request: bytes, conn: Connection) -> HTTPResponse:
        """Turn raw request bytes into a response, never raising."""
        try:
            request = self._parser.parse(raw_request, conn.address)
        except HTTPParseError as e:
            logger.warning(f"[{conn.id}] Bad request from {conn.client_ip}: {e}")
            return bad_request()

        try:
            return self._handler(request)
        except Exception as e:
            logger.exception(f"[{conn.id}] Handler error: {e}")
            return internal_error()
