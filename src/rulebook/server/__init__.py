"""Stdio JSON-RPC server — context, dispatcher and transport."""

from rulebook.server.context import ServerContext
from rulebook.server.dispatcher import RequestDispatcher
from rulebook.server.transport import StdioTransport

__all__ = [
    "RequestDispatcher",
    "ServerContext",
    "StdioTransport",
]
