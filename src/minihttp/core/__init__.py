"""
Core networking components.

    SocketServer     listening socket and accept loop
    Connection       one accepted client, one read and one write
    TransportError   socket failure, fatal to the server
"""

from .connection import Connection, ConnectionState, TransportError
from .socket_server import SocketServer

__all__ = ["Connection", "ConnectionState", "SocketServer", "TransportError"]
