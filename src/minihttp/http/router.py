"""
=============================================================================
PATH ROUTER
=============================================================================

Maps a request path to a handler with an ordered list of predicates.

=============================================================================
ROUTING FLOW
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                        ROUTING FLOW                                 │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   Incoming Request                                                   │
    │   GET /echo/abc                                                      │
    │        │                                                             │
    │        ▼                                                             │
    │   ┌─────────────────────────────────────────────────────────────┐   │
    │   │  ROUTER (evaluated top to bottom)                            │   │
    │   │                                                              │   │
    │   │   path == "/"              → index_handler    no             │   │
    │   │   path starts "/echo/"     → echo_handler     ← MATCH!       │   │
    │   │   path == "/user-agent"    → user_agent_h…    (not checked)  │   │
    │   │   path starts "/files/"    → file_handler     (not checked)  │   │
    │   │                                                              │   │
    │   └─────────────────────────────────────────────────────────────┘   │
    │        │                                                             │
    │        ▼                                                             │
    │   echo_handler(request) → HTTPResponse                               │
    │                                                                      │
    │   No predicate matched → bare 404                                    │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
PREDICATES
=============================================================================

Only two kinds exist:

    Route.exact("/user-agent", handler)   path == "/user-agent"
    Route.prefix("/files/", handler)      path.startswith("/files/")

There are no path parameters. A prefix handler pulls its own trailing
segment out of the path:

    "/files/notes.txt".split("/")  →  ["", "files", "notes.txt"]
                                                    ─────┬─────
                                                    segment [2]

The route list is fixed when the Router is built. First match wins and
overlapping routes are resolved purely by order.

=============================================================================
"""

from dataclasses import dataclass
import logging
from typing import Callable, Iterable, Optional, Tuple

from .request import HTTPRequest
from .response import HTTPResponse, not_found


logger = logging.getLogger(__name__)


# Handler: A function that takes a request and returns a response
Handler = Callable[[HTTPRequest], HTTPResponse]

# Predicate: A test over the request path
PathPredicate = Callable[[str], bool]


@dataclass(frozen=True)
class Route:
    """
    A path predicate bound to a handler.

        Route(
            predicate=lambda path: path.startswith("/echo/"),
            handler=echo_handler,
            name="prefix /echo/",
        )
    """

    predicate: PathPredicate
    handler: Handler
    name: str = ""

    @classmethod
    def exact(cls, path: str, handler: Handler) -> "Route":
        """Route matching one literal path."""
        return cls(
            predicate=lambda request_path: request_path == path,
            handler=handler,
            name=f"exact {path}",
        )

    @classmethod
    def prefix(cls, prefix: str, handler: Handler) -> "Route":
        """Route matching every path that begins with ``prefix``."""
        return cls(
            predicate=lambda request_path: request_path.startswith(prefix),
            handler=handler,
            name=f"prefix {prefix}",
        )

    def matches(self, path: str) -> bool:
        """Evaluate the predicate against a request path."""
        return self.predicate(path)


class Router:
    """
    Ordered, immutable route table.

        router = Router([
            Route.exact("/", index_handler),
            Route.prefix("/echo/", echo_handler),
        ])

        response = router.handle(request)

    Routes are stored as a tuple; the table cannot change after
    construction, so worker threads read it without locking.
    """

    def __init__(self, routes: Iterable[Route] = ()):
        self._routes: Tuple[Route, ...] = tuple(routes)

    def match(self, path: str) -> Optional[Route]:
        """
        Find the first route whose predicate accepts ``path``.

        Returns:
            The matching Route, or None.
        """
        for route in self._routes:
            if route.matches(path):
                return route
        return None

    def handle(self, request: HTTPRequest) -> HTTPResponse:
        """
        Route a request to its handler.

        Returns:
            The handler's response, or a bare 404 if no route matches.
        """
        route = self.match(request.path)

        if route is None:
            logger.debug(f"No route matches {request.path}")
            return not_found()

        logger.debug(f"{request.method} {request.path} → {route.name}")
        return route.handler(request)

    # Alias: router.route(request) -> response
    route = handle

    def __len__(self) -> int:
        return len(self._routes)

    def __iter__(self):
        return iter(self._routes)

    def log_routes(self) -> None:
        """Log the route table at DEBUG level, in matching order."""
        for index, route in enumerate(self._routes, start=1):
            logger.debug(f"  {index}. {route.name} → {route.handler.__name__}")
