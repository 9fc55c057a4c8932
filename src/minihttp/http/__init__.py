"""
=============================================================================
HTTP PROTOCOL LAYER
=============================================================================

The core of the server: wire parsing, routing and response serialization.

    ┌─────────────────────────────────────────────────────────────────────┐
    │ REQUEST PARSER (request.py)                                         │
    │   b"GET /echo/abc HTTP/1.1\r\n...\r\n\r\n"                          │
    │        → HTTPRequest(method="GET", path="/echo/abc", ...)           │
    ├─────────────────────────────────────────────────────────────────────┤
    │ ROUTER (router.py)                                                  │
    │   ordered (predicate, handler) pairs, first match wins, else 404    │
    ├─────────────────────────────────────────────────────────────────────┤
    │ RESPONSE SERIALIZER (response.py)                                   │
    │   HTTPResponse(status=200, headers=[...], body=b"abc")              │
    │        → b"HTTP/1.1 200 OK\r\n...\r\n\r\nabc"                       │
    ├─────────────────────────────────────────────────────────────────────┤
    │ STATUS CODES (status_codes.py)                                      │
    │   HTTPStatus.NOT_FOUND → 404, phrase "Not Found"                    │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from .request import HTTPRequest, RequestParser, HTTPParseError, parse_request
from .response import (
    HTTPResponse,
    ResponseBuilder,
    serialize_response,
    ok,                 # 200 OK
    created,            # 201 Created
    bad_request,        # 400 Bad Request
    not_found,          # 404 Not Found
    internal_error,     # 500 Internal Server Error
)
from .router import Router, Route, Handler
from .status_codes import HTTPStatus

__all__ = [
    # Request parsing
    "HTTPRequest",
    "RequestParser",
    "HTTPParseError",
    "parse_request",

    # Response serialization
    "HTTPResponse",
    "ResponseBuilder",
    "serialize_response",
    "ok",
    "created",
    "bad_request",
    "not_found",
    "internal_error",

    # Routing
    "Router",
    "Route",
    "Handler",

    # Status codes
    "HTTPStatus",
]
