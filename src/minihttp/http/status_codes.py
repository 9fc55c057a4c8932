"""
=============================================================================
HTTP STATUS CODES
=============================================================================

The status codes this server can emit, with their reason phrases.

=============================================================================
STATUS LINE FRAGMENT
=============================================================================

The serializer appends a "status fragment" directly to the protocol
version. The fragment carries its own leading space:

    HTTP/1.1 + " 200 OK" + \r\n   →   HTTP/1.1 200 OK\r\n
    ──┬─────   ────┬────
      │            │
    version     fragment (leading space, code, space, phrase)

=============================================================================
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    """
    HTTP status codes and reason phrases.

    Extends IntEnum, so members compare equal to plain integers:

        >>> HTTPStatus.NOT_FOUND == 404
        True
        >>> HTTPStatus.NOT_FOUND.phrase
        'Not Found'
    """

    # 2xx SUCCESS
    OK = 200                        # Standard success response
    CREATED = 201                   # File written by POST /files/...

    # 4xx CLIENT ERRORS
    BAD_REQUEST = 400               # Request line could not be split
    NOT_FOUND = 404                 # No route, missing file, unknown method

    # 5xx SERVER ERRORS
    INTERNAL_SERVER_ERROR = 500     # File I/O or compression failure

    @property
    def phrase(self) -> str:
        """Reason phrase for this status code."""
        return _STATUS_PHRASES.get(self, "Unknown")

    @property
    def fragment(self) -> str:
        """
        Status fragment as written after the protocol version.

        Example: HTTPStatus.OK.fragment == " 200 OK"
        """
        return f" {int(self)} {self.phrase}"


_STATUS_PHRASES = {
    HTTPStatus.OK: "OK",
    HTTPStatus.CREATED: "Created",
    HTTPStatus.BAD_REQUEST: "Bad Request",
    HTTPStatus.NOT_FOUND: "Not Found",
    HTTPStatus.INTERNAL_SERVER_ERROR: "Internal Server Error",
}
