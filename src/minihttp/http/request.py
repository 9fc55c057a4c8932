"""
=============================================================================
HTTP REQUEST PARSER
=============================================================================

Parses the raw bytes of a single socket read into an HTTPRequest.

=============================================================================
HTTP REQUEST ANATOMY
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                     HTTP REQUEST STRUCTURE                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   POST /files/notes.txt HTTP/1.1\r\n       ← request line           │
    │   Host: localhost:4221\r\n                 ← header                 │
    │   Content-Length: 3\r\n                    ← header                 │
    │   \r\n                                     ← blank separator        │
    │   abc                                      ← body                   │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
FRAMING STRATEGY
=============================================================================

The whole buffer is split on CRLF. For the request above:

    sections = [
        b"POST /files/notes.txt HTTP/1.1",   ← sections[0]     request line
        b"Host: localhost:4221",             ┐
        b"Content-Length: 3",                ┘ sections[1:-2] headers
        b"",                                 ← sections[-2]    separator
        b"abc",                              ← sections[-1]    body
    ]

The body is whatever follows the last CRLF. Content-Length is NOT used to
find the body: the server reads exactly once, so the read itself is the
frame. A body that contains CRLF is split apart and only its last line
survives. That limitation is accepted for this server.

=============================================================================
HEADER NORMALIZATION
=============================================================================

Header lines are stored as raw "name: value" strings, lower-cased IN FULL
(value included). Lookups are then simple prefix checks:

    "User-Agent: curl/8.0"  →  "user-agent: curl/8.0"

=============================================================================
"""

from dataclasses import dataclass, field
from typing import List


CRLF = b"\r\n"


class HTTPParseError(Exception):
    """
    Raised when a request cannot be split into its parts.

    Carries the HTTP status code the server answers with (400).
    """

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.status_code = status_code


@dataclass
class HTTPRequest:
    """
    Represents a parsed HTTP request.

    =========================================================================
    ATTRIBUTES
    =========================================================================

        method:         Request method token, accepted as-is ("GET", "POST")

        path:           Origin-form path ("/echo/abc")

        version:        Protocol version token ("HTTP/1.1")

        headers:        Raw header lines in arrival order, fully lower-cased
                        ["host: localhost:4221", "user-agent: curl/8.0"]

        body:           Bytes after the blank separator line

        directory:      Serving directory configured on the command line.
                        Injected by the server, never read from the wire.

        client_address: (ip, port) of the peer, for logging

    =========================================================================
    """

    method: str
    path: str
    version: str = "HTTP/1.1"
    headers: List[str] = field(default_factory=list)
    body: bytes = b""
    directory: str = ""
    client_address: tuple[str, int] = ("", 0)

    def get_header(self, name: str, default: str = "") -> str:
        """
        Get the value of the first header line starting with ``name``.

        The match is a prefix check on the lower-cased line, so the lookup
        is case-insensitive:

            request.get_header("User-Agent")   # "curl/8.0"

        Args:
            name: Header name (any case).
            default: Value returned when no header matches.

        Returns:
            Text after the first ": " of the matching line, or default.
        """
        prefix = name.lower()
        for header in self.headers:
            if header.startswith(prefix):
                return header.partition(": ")[2]
        return default

    @property
    def user_agent(self) -> str:
        """The User-Agent header value, empty if absent."""
        return self.get_header("user-agent")


class RequestParser:
    """
    Parses raw HTTP request bytes into HTTPRequest objects.

    ==========================================================================
    PARSER STEPS
    ==========================================================================

        Raw bytes (one recv)
              │
              ▼
        1. Split on CRLF
        2. Request line → whitespace tokens → method, path, version
        3. sections[1:-2] → header lines, lower-cased
        4. sections[-1]  → body
        5. Attach directory + client address
              │
              ▼
        HTTPRequest

    ==========================================================================
    """

    def __init__(self, directory: str = ""):
        """
        Initialize the request parser.

        Args:
            directory: Serving directory copied into every parsed request.
        """
        self.directory = directory

    def parse(
        self,
        data: bytes,
        client_address: tuple[str, int] = ("", 0),
    ) -> HTTPRequest:
        """
        Parse raw HTTP request data into an HTTPRequest object.

        Args:
            data: Raw request bytes from a single socket read.
            client_address: Client's (ip, port) tuple for logging.

        Returns:
            Parsed HTTPRequest object.

        Raises:
            HTTPParseError: If the request line has fewer than three tokens.
        """
        sections = data.split(CRLF)

        method, path, version = self._parse_request_line(sections[0])

        # Everything between the request line and the blank separator.
        # A buffer with no separator yields no headers.
        headers = [
            line.decode("utf-8", errors="replace").lower()
            for line in sections[1:-2]
        ]

        body = sections[-1] if len(sections) > 1 else b""

        return HTTPRequest(
            method=method,
            path=path,
            version=version,
            headers=headers,
            body=body,
            directory=self.directory,
            client_address=client_address,
        )

    def _parse_request_line(self, line: bytes) -> tuple[str, str, str]:
        """
        Split the request line on whitespace.

            METHOD SP REQUEST-TARGET SP HTTP-VERSION

        Method and version are not validated. Tokens past the third are
        ignored.

        Raises:
            HTTPParseError: If there are fewer than three tokens.
        """
        tokens = line.decode("utf-8", errors="replace").split()
        if len(tokens) < 3:
            raise HTTPParseError(f"Invalid request line: {line!r}")

        method, path, version = tokens[:3]
        return method, path, version


def parse_request(
    data: bytes,
    directory: str = "",
    client_address: tuple[str, int] = ("", 0),
) -> HTTPRequest:
    """
    Convenience function to parse an HTTP request.

    Args:
        data: Raw HTTP request bytes.
        directory: Serving directory to attach to the request.
        client_address: Client's (ip, port) tuple.

    Returns:
        Parsed HTTPRequest object.
    """
    parser = RequestParser(directory=directory)
    return parser.parse(data, client_address)


def path_segment(path: str) -> str:
    """
    Return the third "/"-separated element of a path.

        "/files/notes.txt"  → "notes.txt"
        "/echo/abc/def"     → "abc"
        "/echo/"            → ""
    """
    parts = path.split("/")
    return parts[2] if len(parts) > 2 else ""

