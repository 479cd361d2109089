"""Error types raised while handling a JSON-RPC request.

Each error carries the JSON-RPC ``code`` it maps to; the dispatcher turns
it into an addressed error response.
"""

from rulebook.protocol.models import ErrorCode


class RpcError(Exception):
    """Base error for all failures reported back to the client."""

    code: int = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidRequestError(RpcError):
    """The request envelope is malformed (e.g. no ``method``)."""

    code = ErrorCode.INVALID_REQUEST


class MethodNotFoundError(RpcError):
    """The requested method, tool or prompt does not exist."""

    code = ErrorCode.METHOD_NOT_FOUND


class InvalidParamsError(RpcError):
    """A required parameter is missing or has the wrong shape."""

    code = ErrorCode.INVALID_PARAMS


class ToolNotFoundError(MethodNotFoundError):
    """Requested tool does not exist in the catalog."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class PromptNotFoundError(MethodNotFoundError):
    """Requested prompt does not exist in the catalog."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown prompt: {name}")
