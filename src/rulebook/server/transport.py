"""Stdio transport — newline-delimited JSON over a pair of text streams.

Reads one line at a time from the input stream and writes each response
as a single compact JSON line, flushed immediately.  Diagnostics go
through :mod:`logging` (configured onto stderr), never onto the output
stream.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO, TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from rulebook.protocol.models import JsonRpcResponse

DEBUG_ENV_VAR = "MCP_DEBUG"

logger = logging.getLogger(__name__)


def debug_enabled() -> bool:
    """Whether ``$MCP_DEBUG`` asks for outgoing payloads to be echoed."""
    return bool(os.environ.get(DEBUG_ENV_VAR))


class StdioTransport:
    """Line-oriented JSON-RPC transport over text streams.

    Defaults to the process's ``stdin``/``stdout``; tests pass
    :class:`io.StringIO` objects instead.
    """

    def __init__(
        self,
        input_stream: IO[str] | None = None,
        output_stream: IO[str] | None = None,
        *,
        echo: bool | None = None,
    ) -> None:
        self._input = input_stream if input_stream is not None else sys.stdin
        self._output = output_stream if output_stream is not None else sys.stdout
        self._echo = debug_enabled() if echo is None else echo

    @property
    def echo(self) -> bool:
        return self._echo

    def lines(self) -> Iterator[str]:
        """Yield input lines until end of stream."""
        yield from self._input

    def send(self, response: JsonRpcResponse) -> None:
        """Write *response* as one JSON line and flush."""
        payload = response.to_json()
        self._output.write(payload + "\n")
        self._output.flush()
        if self._echo:
            logger.info("   JSON output: %s", payload)
