"""MCP models — JSON-RPC 2.0 messages and result payloads.

Implements the message format used by the Model Context Protocol for
server handshake (``initialize``), tool discovery and execution
(``tools/list``, ``tools/call``) and prompt retrieval (``prompts/list``,
``prompts/get``).
"""

from __future__ import annotations

import json
from enum import Enum, IntEnum
from typing import Any, Literal

from pydantic import BaseModel, Field

JSON_RPC_VERSION = "2.0"
PROTOCOL_VERSION = "2024-11-05"


class ErrorCode(IntEnum):
    """JSON-RPC error codes used by the server."""

    # Defined for completeness; unparsable lines are dropped without a reply.
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32000


class Method(str, Enum):
    """The closed set of JSON-RPC methods the server understands."""

    INITIALIZE = "initialize"
    INITIALIZED = "initialized"
    TOOLS_LIST = "tools/list"
    TOOLS_CALL = "tools/call"
    PROMPTS_LIST = "prompts/list"
    PROMPTS_GET = "prompts/get"

    @classmethod
    def lookup(cls, name: str) -> Method | None:
        try:
            return cls(name)
        except ValueError:
            return None


# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request or notification as read off the wire.

    Fields are loose; the dispatcher performs presence checks
    itself so it can answer with the right error code.
    """

    model_config = {"extra": "ignore"}

    jsonrpc: Any = JSON_RPC_VERSION
    id: Any = None
    method: Any = None
    params: Any = None

    @property
    def is_notification(self) -> bool:
        return self.id is None


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response message carrying either a result or an error."""

    jsonrpc: str = JSON_RPC_VERSION
    id: Any
    result: Any = None
    error: JsonRpcError | None = None

    @classmethod
    def success(cls, id: Any, result: Any) -> JsonRpcResponse:
        return cls(id=id, result=result)

    @classmethod
    def failure(cls, id: Any, code: int, message: str) -> JsonRpcResponse:
        return cls(id=id, error=JsonRpcError(code=code, message=message))

    def to_wire(self) -> dict[str, Any]:
        """Return the envelope with exactly one of ``result``/``error`` set."""
        payload: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            payload["error"] = self.error.model_dump(exclude_none=True)
        else:
            payload["result"] = self.result
        return payload

    def to_json(self) -> str:
        """Serialize to one line of compact JSON."""
        return json.dumps(self.to_wire(), separators=(",", ":"), ensure_ascii=False)


# ---------------------------------------------------------------------------
# MCP-specific payloads
# ---------------------------------------------------------------------------


class TextContent(BaseModel):
    """A single text content item."""

    type: Literal["text"] = "text"
    text: str


class ToolCallResult(BaseModel):
    """Result of ``tools/call``."""

    content: list[TextContent] = Field(default_factory=list)


class PromptMessage(BaseModel):
    """One chat message produced by a prompt."""

    role: Literal["user", "assistant"] = "user"
    content: TextContent


class PromptResult(BaseModel):
    """Result of ``prompts/get``."""

    messages: list[PromptMessage] = Field(default_factory=list)
