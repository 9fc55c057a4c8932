"""
The server's route table.

Built once at import time and never modified. Order matters: the router
tries each entry top to bottom and the first match wins.
"""

from .handlers import echo_handler, file_handler, index_handler, user_agent_handler
from .http.router import Route, Router


ROUTES = (
    Route.exact("/", index_handler),
    Route.prefix("/echo/", echo_handler),
    Route.exact("/user-agent", user_agent_handler),
    Route.prefix("/files/", file_handler),
)


def build_router() -> Router:
    """Create a Router over the fixed route table."""
    return Router(ROUTES)
