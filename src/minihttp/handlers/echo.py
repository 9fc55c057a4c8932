"""
=============================================================================
ECHO HANDLER
=============================================================================

GET /echo/{text} returns {text} as a text/plain body, gzip-compressed when
the client asks for it.

=============================================================================
CONTENT NEGOTIATION
=============================================================================

    Request header                          Response
    ─────────────────────────────────────   ──────────────────────────────
    (none)                                  body = b"abc"
    accept-encoding: gzip                   body = gzip(b"abc")
    accept-encoding: deflate, gzip          body = gzip(b"abc")
    accept-encoding: deflate                body = b"abc"

The value list is split on ", ". Every header named exactly
"accept-encoding" is checked, "gzip" must appear as a whole entry
("x-gzip" does not count), and the body is compressed at most once.

Header order in the response:

    Content-Encoding: gzip      ← only when compressed
    Content-Type: text/plain
    Content-Length: <len(final body)>

=============================================================================
"""

import gzip
import logging
import zlib
from typing import List

from ..http.request import HTTPRequest, path_segment
from ..http.response import HTTPResponse, ResponseBuilder, internal_error


logger = logging.getLogger(__name__)


GZIP_ENCODING = "gzip"


def accepts_gzip(headers: List[str]) -> bool:
    """Check every accept-encoding header for a "gzip" entry."""
    for header in headers:
        name, _, value = header.partition(": ")
        if name == "accept-encoding" and GZIP_ENCODING in value.split(", "):
            return True
    return False


def compress(body: bytes) -> bytes:
    """Compress a body with standard gzip framing."""
    return gzip.compress(body)


def echo_handler(request: HTTPRequest) -> HTTPResponse:
    """
    Echo the path segment after /echo/ back to the client.

    Returns:
        200 with the (possibly compressed) text, or a bare 500 if
        compression fails.
    """
    body = path_segment(request.path).encode("utf-8")
    builder = ResponseBuilder()

    if accepts_gzip(request.headers):
        try:
            body = compress(body)
        except (OSError, zlib.error) as e:
            logger.error(f"gzip compression failed for {request.path}: {e}")
            return internal_error()
        builder.header("Content-Encoding", GZIP_ENCODING)

    return builder.text(body).build()
