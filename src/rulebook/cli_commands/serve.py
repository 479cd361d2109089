"""``rulebook serve`` — run the MCP server on stdin/stdout."""

from __future__ import annotations

import logging
import sys

import click
from rich.markup import escape

from rulebook.cli_commands._output import config_option, err_console, load_catalog

_LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


@click.command()
@config_option
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging on stderr.")
@click.option("--debug", is_flag=True, help="Echo every outgoing JSON payload to stderr.")
@click.option("--telemetry", is_flag=True, help="Export request spans to stderr.")
@click.option("--otlp-endpoint", default=None, help="Export request spans via OTLP/gRPC.")
def serve(
    config_path: str | None,
    verbose: bool,
    debug: bool,
    telemetry: bool,
    otlp_endpoint: str | None,
) -> None:
    """Serve the catalog's tools and prompts over line-delimited JSON-RPC.

    Requests are read from stdin and responses written to stdout; all
    diagnostics go to stderr.
    """
    from rulebook.server.context import ServerContext
    from rulebook.server.dispatcher import RequestDispatcher
    from rulebook.server.transport import StdioTransport

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=_LOG_FORMAT,
        stream=sys.stderr,
    )

    config = load_catalog(config_path)

    if telemetry or otlp_endpoint:
        from rulebook.utils.telemetry import configure_telemetry

        try:
            configure_telemetry(
                service_name=config.server.name,
                export_to_console=telemetry,
                otlp_endpoint=otlp_endpoint,
            )
        except ImportError as exc:
            err_console.print(f"[red]**ERROR**:[/red] {escape(str(exc))}", highlight=False)
            sys.exit(1)

    dispatcher = RequestDispatcher(ServerContext.from_config(config))
    transport = StdioTransport(echo=True if debug else None)
    dispatcher.serve(transport)
