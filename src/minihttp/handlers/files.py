"""
=============================================================================
FILE HANDLER
=============================================================================

Reads and writes files under the directory given with --directory.

=============================================================================
METHOD DISPATCH
=============================================================================

    GET  /files/{name}   read <directory>/{name}
                           200  Content-Type: application/octet-stream
                                Content-Length: <size>
                                <file bytes>
                           404  file does not exist
                           500  any other read error (directory, permissions)

    POST /files/{name}   write the request body to <directory>/{name}
                           201  written (created or truncated)
                           500  write error

    anything else        404

=============================================================================
PATH RESOLUTION
=============================================================================

Only the third "/"-separated element of the URL is used:

    directory="/tmp/data", path="/files/notes.txt"
        → os.path.join("/tmp/data", "notes.txt") = "/tmp/data/notes.txt"

    directory="", path="/files/notes.txt"
        → "notes.txt" (relative to the process working directory)

Trailing NUL bytes are stripped from POST bodies before writing, so a body
padded out to the read buffer size is stored without the padding.

Concurrent writers to the same name are not synchronized.

=============================================================================
"""

import logging
import os

from ..http.request import HTTPRequest, path_segment
from ..http.response import (
    HTTPResponse,
    ResponseBuilder,
    created,
    internal_error,
    not_found,
)


logger = logging.getLogger(__name__)


def resolve_path(request: HTTPRequest) -> str:
    """Join the serving directory with the file name from the URL."""
    return os.path.join(request.directory, path_segment(request.path))


def get_file(request: HTTPRequest) -> HTTPResponse:
    """Serve the file named in the URL as application/octet-stream."""
    file_path = resolve_path(request)

    try:
        with open(file_path, "rb") as f:
            content = f.read()
    except FileNotFoundError:
        logger.debug(f"File not found: {file_path}")
        return not_found()
    except OSError as e:
        logger.warning(f"Error reading file {file_path}: {e}")
        return internal_error()

    return ResponseBuilder().body(content).build()


def post_file(request: HTTPRequest) -> HTTPResponse:
    """Write the request body to the file named in the URL."""
    file_path = resolve_path(request)

    try:
        with open(file_path, "wb") as f:
            f.write(request.body.rstrip(b"\x00"))
    except OSError as e:
        logger.warning(f"Error writing file {file_path}: {e}")
        return internal_error()

    logger.debug(f"Wrote {file_path}")
    return created()


def file_handler(request: HTTPRequest) -> HTTPResponse:
    """Dispatch /files/ requests by method."""
    if request.method == "GET":
        return get_file(request)
    if request.method == "POST":
        return post_file(request)
    return not_found()
