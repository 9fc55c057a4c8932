"""
=============================================================================
MINIHTTP - A MINIMAL HTTP/1.1 SERVER OVER RAW SOCKETS
=============================================================================

No http.server, no framework: the request parser, router and response
serializer are written directly against the bytes on the wire.

=============================================================================
PACKAGE LAYOUT
=============================================================================

    minihttp/
    ├── http/           protocol layer
    │   ├── request     raw bytes → HTTPRequest
    │   ├── response    HTTPResponse → raw bytes
    │   ├── router      ordered path predicates → handler
    │   └── status_codes
    ├── handlers/       index, echo, user-agent, files
    ├── middleware/     access logging
    ├── core/           sockets, connections, TransportError
    ├── routes.py       the route table
    ├── config.py       ServerConfig
    ├── server.py       HTTPServer
    └── __main__.py     python -m minihttp

=============================================================================
ROUTES
=============================================================================

    GET  /                 200, no body
    GET  /echo/{text}      {text} as text/plain, gzip on request
    GET  /user-agent       User-Agent value as text/plain
    GET  /files/{name}     file contents, application/octet-stream
    POST /files/{name}     write body to file, 201
    anything else          404

=============================================================================
"""

__version__ = "1.0.0"

from .server import HTTPServer
from .config import ServerConfig

__all__ = ["HTTPServer", "ServerConfig", "__version__"]
