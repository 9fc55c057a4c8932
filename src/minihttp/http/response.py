"""
=============================================================================
HTTP RESPONSE SERIALIZER
=============================================================================

Holds an HTTP/1.1 response and writes it out byte-for-byte.

=============================================================================
HTTP RESPONSE ANATOMY
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                     HTTP RESPONSE STRUCTURE                         │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   HTTP/1.1 200 OK\r\n               ← version + status fragment      │
    │   Content-Type: text/plain\r\n      ← headers, in insertion order    │
    │   Content-Length: 3\r\n                                              │
    │   \r\n                              ← end of headers                 │
    │   abc                               ← body, no trailing CRLF         │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
NO AUTOMATIC HEADERS
=============================================================================

The serializer writes exactly what it is given. It does NOT add
Content-Length, Date, Server or Connection. A handler that returns a
body is responsible for setting a matching Content-Length:

    ResponseBuilder().text("abc").build()
        → headers ["Content-Type: text/plain", "Content-Length: 3"]

A 404 built with not_found() serializes to exactly:

    b"HTTP/1.1 404 Not Found\r\n\r\n"

=============================================================================
"""

from dataclasses import dataclass, field
from typing import List, Union

from .status_codes import HTTPStatus


HTTP_VERSION = "HTTP/1.1"
CRLF = "\r\n"


@dataclass
class HTTPResponse:
    """
    Represents an HTTP response to be sent to the client.

    Use ResponseBuilder or the convenience functions (ok, created,
    not_found, internal_error) to construct one.

    Attributes:
        status:  HTTPStatus member
        headers: Raw header lines ("Content-Type: text/plain"), written in
                 list order
        body:    Body bytes
    """

    status: HTTPStatus = HTTPStatus.OK
    headers: List[str] = field(default_factory=list)
    body: bytes = b""

    @property
    def status_fragment(self) -> str:
        """The status fragment appended to the version, e.g. " 200 OK"."""
        return self.status.fragment

    @property
    def status_line(self) -> str:
        """Full status line without terminator: "HTTP/1.1 200 OK"."""
        return HTTP_VERSION + self.status_fragment

    def to_bytes(self) -> bytes:
        """
        Serialize the response to bytes for sending over the socket.

        =====================================================================
        SERIALIZATION FORMAT
        =====================================================================

            HTTP/1.1 + " 200 OK" + \r\n
            <header 1> \r\n
            <header 2> \r\n
            \r\n
            <body bytes>

        =====================================================================

        Returns:
            Complete HTTP response as bytes ready for socket.sendall()
        """
        lines = [self.status_line]
        lines.extend(self.headers)

        # Empty line separates headers from body
        head = CRLF.join(lines) + CRLF + CRLF

        return head.encode("utf-8") + self.body


class ResponseBuilder:
    """
    Fluent builder for constructing HTTP responses.

        response = (ResponseBuilder()
            .status(HTTPStatus.OK)
            .header("Content-Encoding", "gzip")
            .body(compressed, content_type="text/plain")
            .build())

    Each method returns self except build().
    """

    def __init__(self):
        self._status = HTTPStatus.OK
        self._headers: List[str] = []
        self._body: bytes = b""

    def status(self, status: HTTPStatus) -> "ResponseBuilder":
        """Set the HTTP status code."""
        self._status = status
        return self

    def header(self, name: str, value: Union[str, int]) -> "ResponseBuilder":
        """Append a single header line."""
        self._headers.append(f"{name}: {value}")
        return self

    def body(
        self,
        body: Union[str, bytes],
        content_type: str = "application/octet-stream",
    ) -> "ResponseBuilder":
        """
        Set the body together with its Content-Type and Content-Length.

        Strings are encoded to UTF-8 first; Content-Length is the byte
        count of the final body.
        """
        if isinstance(body, str):
            body = body.encode("utf-8")
        self._body = body
        self.header("Content-Type", content_type)
        self.header("Content-Length", len(body))
        return self

    def text(self, text: Union[str, bytes]) -> "ResponseBuilder":
        """Set a text/plain body."""
        return self.body(text, content_type="text/plain")

    def build(self) -> HTTPResponse:
        """Build and return the HTTPResponse object."""
        return HTTPResponse(
            status=self._status,
            headers=list(self._headers),
            body=self._body,
        )

    def to_bytes(self) -> bytes:
        """Build and serialize the response in one step."""
        return self.build().to_bytes()


def serialize_response(response: HTTPResponse) -> bytes:
    """
    Serialize a response to wire bytes.

    Functional form of HTTPResponse.to_bytes().
    """
    return response.to_bytes()


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================
#
# Status-only responses: no headers, no body.
#
#     return not_found()        → b"HTTP/1.1 404 Not Found\r\n\r\n"
#
# =============================================================================

def ok() -> HTTPResponse:
    """Create a bare 200 OK response."""
    return HTTPResponse(status=HTTPStatus.OK)


def created() -> HTTPResponse:
    """Create a bare 201 Created response."""
    return HTTPResponse(status=HTTPStatus.CREATED)


def bad_request() -> HTTPResponse:
    """Create a bare 400 Bad Request response."""
    return HTTPResponse(status=HTTPStatus.BAD_REQUEST)


def not_found() -> HTTPResponse:
    """Create a bare 404 Not Found response."""
    return HTTPResponse(status=HTTPStatus.NOT_FOUND)


def internal_error() -> HTTPResponse:
    """Create a bare 500 Internal Server Error response."""
    return HTTPResponse(status=HTTPStatus.INTERNAL_SERVER_ERROR)
