"""
Handlers for the two fixed paths: "/" and "/user-agent".
"""

from ..http.request import HTTPRequest
from ..http.response import HTTPResponse, ResponseBuilder, ok


def index_handler(request: HTTPRequest) -> HTTPResponse:
    """GET / → bare 200 OK."""
    return ok()


def user_agent_handler(request: HTTPRequest) -> HTTPResponse:
    """
    Echo the User-Agent header as a text/plain body.

    Header lines are lower-cased by the parser, so the value comes back
    lower-cased too. A missing header gives an empty body with
    Content-Length: 0.
    """
    return ResponseBuilder().text(request.user_agent).build()
