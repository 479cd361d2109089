"""Protocol layer — JSON-RPC envelope, MCP payloads and error types."""

from rulebook.protocol.errors import (
    InvalidParamsError,
    InvalidRequestError,
    MethodNotFoundError,
    PromptNotFoundError,
    RpcError,
    ToolNotFoundError,
)
from rulebook.protocol.models import (
    JSON_RPC_VERSION,
    PROTOCOL_VERSION,
    ErrorCode,
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    Method,
    PromptMessage,
    PromptResult,
    TextContent,
    ToolCallResult,
)

__all__ = [
    "JSON_RPC_VERSION",
    "PROTOCOL_VERSION",
    "ErrorCode",
    "InvalidParamsError",
    "InvalidRequestError",
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "Method",
    "MethodNotFoundError",
    "PromptMessage",
    "PromptNotFoundError",
    "PromptResult",
    "RpcError",
    "TextContent",
    "ToolCallResult",
    "ToolNotFoundError",
]
