"""rulebook — a stdio MCP server for coding-rule tools and prompt templates."""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from rulebook.config.loader import ConfigLoader as ConfigLoader
    from rulebook.server.context import ServerContext as ServerContext
    from rulebook.server.dispatcher import RequestDispatcher as RequestDispatcher

_LAZY_EXPORTS = {
    "ConfigLoader": "rulebook.config.loader",
    "ServerContext": "rulebook.server.context",
    "RequestDispatcher": "rulebook.server.dispatcher",
}


def __getattr__(name: str) -> object:
    module_path = _LAZY_EXPORTS.get(name)
    if module_path is not None:
        import importlib

        mod = importlib.import_module(module_path)
        return getattr(mod, name)
    raise AttributeError(f"module 'rulebook' has no attribute {name!r}")
