"""
=============================================================================
ROUTE HANDLERS
=============================================================================

Application handlers built on top of the protocol layer. Each one is a
plain function HTTPRequest → HTTPResponse with no shared state; the only
configuration they see is request.directory.

    index_handler        GET /               bare 200
    echo_handler         /echo/{text}        text body, optional gzip
    user_agent_handler   /user-agent         User-Agent value as body
    file_handler         /files/{name}       GET reads, POST writes

=============================================================================
"""

from .basic import index_handler, user_agent_handler
from .echo import echo_handler
from .files import file_handler, get_file, post_file

__all__ = [
    "index_handler",
    "echo_handler",
    "user_agent_handler",
    "file_handler",
    "get_file",
    "post_file",
]
