"""RequestDispatcher — the JSON-RPC state machine behind ``rulebook serve``.

Each input line is handled to completion before the next one is read:

1. Unparsable lines (and JSON that is not an object) are logged and
   dropped; no id can be recovered, so nothing is sent back.
2. Messages without an ``id`` are notifications: logged, never answered.
3. Addressed requests are routed through a fixed :class:`Method` to
   handler table.  Handlers return a result payload, or ``None`` when the
   method produces no response.
4. :class:`RpcError` raised by a handler becomes an addressed error
   response with the error's code; any other exception becomes
   ``INTERNAL_ERROR``.  Neither stops the loop.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from rulebook.protocol.errors import (
    InvalidParamsError,
    InvalidRequestError,
    MethodNotFoundError,
    PromptNotFoundError,
    RpcError,
    ToolNotFoundError,
)
from rulebook.protocol.models import (
    PROTOCOL_VERSION,
    ErrorCode,
    JsonRpcRequest,
    JsonRpcResponse,
    Method,
)
from rulebook.utils.telemetry import (
    ATTR_PROMPT_NAME,
    ATTR_RPC_ERROR_CODE,
    ATTR_RPC_ID,
    ATTR_RPC_METHOD,
    ATTR_TOOL_NAME,
    get_tracer,
    set_span_attribute,
)

if TYPE_CHECKING:
    from rulebook.server.context import ServerContext
    from rulebook.server.transport import StdioTransport

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

Handler = Callable[[Any], "dict[str, Any] | None"]


def _require_mapping(value: Any, field: str) -> Mapping[str, Any]:
    """Return *value* as a mapping; ``None`` counts as empty."""
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise InvalidParamsError(f"Invalid params: '{field}' must be an object")
    return value


class RequestDispatcher:
    """Route JSON-RPC requests to handlers backed by a :class:`ServerContext`.

    Usage::

        dispatcher = RequestDispatcher(ServerContext.from_config(config))
        dispatcher.serve(StdioTransport())
    """

    def __init__(self, context: ServerContext) -> None:
        self._context = context
        self._handlers: dict[Method, Handler] = {
            Method.INITIALIZE: self._handle_initialize,
            Method.INITIALIZED: self._handle_initialized,
            Method.TOOLS_LIST: self._handle_tools_list,
            Method.TOOLS_CALL: self._handle_tools_call,
            Method.PROMPTS_LIST: self._handle_prompts_list,
            Method.PROMPTS_GET: self._handle_prompts_get,
        }

    @property
    def context(self) -> ServerContext:
        return self._context

    def serve(self, transport: StdioTransport) -> None:
        """Process lines from *transport* until its input is exhausted."""
        logger.info(
            "MCP server (%s %s) started. Waiting for requests on STDIN...",
            self._context.manifest.name,
            self._context.manifest.version,
        )
        for line in transport.lines():
            try:
                response = self.handle_line(line)
            except Exception:
                logger.exception("Dropping input line after unexpected error.")
                continue
            if response is not None:
                transport.send(response)
        logger.info("Input closed, shutting down.")

    def handle_line(self, line: str) -> JsonRpcResponse | None:
        """Handle one raw input line and return the response to send, if any."""
        if not line.strip():
            logger.debug("Skipping blank input line.")
            return None

        try:
            raw = json.loads(line)
        # Over-nested input exhausts the decoder's recursion limit.
        except (ValueError, RecursionError):
            logger.warning("Failed to parse JSON input.")
            return None

        if not isinstance(raw, dict):
            logger.warning("Ignoring JSON-RPC message that is not an object.")
            return None

        return self.handle(JsonRpcRequest.model_validate(raw))

    def handle(self, request: JsonRpcRequest) -> JsonRpcResponse | None:
        """Handle a parsed request; notifications always yield ``None``."""
        if request.is_notification:
            try:
                self._handle_notification(request)
            except Exception:
                logger.exception("Error while handling notification %s", request.method)
            return None

        with _tracer.start_as_current_span("rulebook.request") as span:
            span.set_attribute(ATTR_RPC_ID, str(request.id))
            try:
                result = self._dispatch(request)
            except RpcError as exc:
                span.set_attribute(ATTR_RPC_ERROR_CODE, int(exc.code))
                logger.warning("<- Sent error response: %s", exc.message)
                return JsonRpcResponse.failure(request.id, int(exc.code), exc.message)
            except Exception as exc:
                span.record_exception(exc)
                span.set_attribute(ATTR_RPC_ERROR_CODE, int(ErrorCode.INTERNAL_ERROR))
                logger.exception("**FATAL ERROR**: %s", exc)
                return JsonRpcResponse.failure(
                    request.id,
                    int(ErrorCode.INTERNAL_ERROR),
                    f"Server execution error: {exc}",
                )

        if result is None:
            return None
        return JsonRpcResponse.success(request.id, result)

    # ------------------------------------------------------------------
    # Routing
    # ------------------------------------------------------------------

    def _handle_notification(self, request: JsonRpcRequest) -> None:
        logger.info("<- Received %s notification.", request.method)

    def _dispatch(self, request: JsonRpcRequest) -> dict[str, Any] | None:
        method = request.method
        if not method:
            raise InvalidRequestError("Invalid Request: missing 'method'")

        logger.info("-> Received request (ID: %s, Method: %s)", request.id, method)
        set_span_attribute(ATTR_RPC_METHOD, str(method))

        kind = Method.lookup(method) if isinstance(method, str) else None
        if kind is None:
            raise MethodNotFoundError(f"Unknown JSON-RPC method: {method}")
        return self._handlers[kind](request.params)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _handle_initialize(self, params: Any) -> dict[str, Any]:
        manifest = self._context.manifest
        logger.info("<- Sending initialize response.")
        return {
            "protocolVersion": PROTOCOL_VERSION,
            "capabilities": {
                "tools": {"listChanged": False},
                "prompts": {"listChanged": False},
            },
            "serverInfo": {"name": manifest.name, "version": manifest.version},
        }

    def _handle_initialized(self, params: Any) -> None:
        logger.info("<- Received initialized notification.")
        return None

    def _handle_tools_list(self, params: Any) -> dict[str, Any]:
        tools = self._context.manifest.tools
        logger.info("<- Sending tools/list response with %d tool(s)", len(tools))
        logger.info("<- Tools: %s", ", ".join(t.name for t in tools))
        return {"tools": [tool.to_wire() for tool in tools]}

    def _handle_tools_call(self, params: Any) -> dict[str, Any]:
        params = _require_mapping(params, "params")
        name = params.get("name")
        if name is None:
            raise InvalidParamsError("Invalid params: missing 'name'")

        set_span_attribute(ATTR_TOOL_NAME, str(name))
        result = self._context.resolver.resolve_tool(name)
        if result is None:
            raise ToolNotFoundError(name)

        logger.info("<- Sending tools/call response for %s.", name)
        return result.model_dump()

    def _handle_prompts_list(self, params: Any) -> dict[str, Any]:
        prompts = self._context.prompts
        logger.info("<- Sending prompts/list response with %d prompt(s)", len(prompts))
        logger.info("<- Prompts: %s", ", ".join(p.name for p in prompts))
        return {"prompts": [prompt.to_wire() for prompt in prompts]}

    def _handle_prompts_get(self, params: Any) -> dict[str, Any]:
        params = _require_mapping(params, "params")
        name = params.get("name")
        if name is None:
            raise InvalidParamsError("Invalid params: missing 'name'")
        arguments = _require_mapping(params.get("arguments"), "arguments")

        set_span_attribute(ATTR_PROMPT_NAME, str(name))
        result = self._context.resolver.resolve_prompt(name, arguments)
        if result is None:
            raise PromptNotFoundError(name)

        logger.info("<- Sending prompts/get response for %s.", name)
        return result.model_dump()
