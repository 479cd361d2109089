"""OpenTelemetry tracing helpers for rulebook.

Provides a thin wrapper around the OpenTelemetry API so the dispatcher can
call ``get_tracer()`` without caring whether the SDK is installed.  When the
SDK is *not* configured the API returns no-op implementations.

Usage::

    from rulebook.utils.telemetry import get_tracer

    _tracer = get_tracer(__name__)

    with _tracer.start_as_current_span("rulebook.request") as span:
        span.set_attribute(ATTR_RPC_METHOD, "tools/call")

To activate real tracing, call :func:`configure_telemetry` once at startup
(requires the ``otel`` extra: ``pip install rulebook[otel]``).  Spans are
never exported to stdout, which carries the protocol stream.
"""

from __future__ import annotations

import sys
from typing import Any

from opentelemetry import trace

# ---------------------------------------------------------------------------
# Semantic attribute keys
#
# Each addressed request gets one ``rulebook.request`` span carrying the
# method and id. Error responses add the JSON-RPC code. ``tools/call`` and
# ``prompts/get`` add the requested name. Notifications are not traced.
# ---------------------------------------------------------------------------

ATTR_RPC_METHOD = "rulebook.rpc.method"
ATTR_RPC_ID = "rulebook.rpc.id"
ATTR_RPC_ERROR_CODE = "rulebook.rpc.error_code"
ATTR_TOOL_NAME = "rulebook.tool.name"
ATTR_PROMPT_NAME = "rulebook.prompt.name"

_INSTRUMENTATION_NAME = "rulebook"


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Return a :class:`~opentelemetry.trace.Tracer` for *name*.

    If the OpenTelemetry SDK has not been configured the returned tracer
    is a no-op.
    """
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def set_span_attribute(key: str, value: Any) -> None:
    """Set an attribute on the active span (a no-op without an SDK)."""
    trace.get_current_span().set_attribute(key, value)


def configure_telemetry(
    *,
    service_name: str = "rulebook",
    export_to_console: bool = True,
    otlp_endpoint: str | None = None,
) -> None:
    """Configure OpenTelemetry tracing (requires ``rulebook[otel]``).

    Parameters
    ----------
    service_name:
        The ``service.name`` resource attribute.
    export_to_console:
        If ``True``, export spans as JSON to stderr.
    otlp_endpoint:
        If set, export spans via OTLP/gRPC to this endpoint.

    Raises
    ------
    ImportError
        If the ``opentelemetry-sdk`` package is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource
        from opentelemetry.sdk.trace import TracerProvider
        from opentelemetry.sdk.trace.export import BatchSpanProcessor, SimpleSpanProcessor
    except ImportError as exc:
        msg = (
            "opentelemetry-sdk is required for configure_telemetry(). "
            "Install it with: pip install rulebook[otel]"
        )
        raise ImportError(msg) from exc

    resource = Resource.create({"service.name": service_name})
    provider = TracerProvider(resource=resource)

    if export_to_console:
        _add_console_exporter(provider, SimpleSpanProcessor)

    if otlp_endpoint:
        _add_otlp_exporter(provider, BatchSpanProcessor, otlp_endpoint)

    trace.set_tracer_provider(provider)


def _add_console_exporter(provider: Any, processor_cls: Any) -> None:
    """Attach the console exporter (JSON to stderr)."""
    from opentelemetry.sdk.trace.export import ConsoleSpanExporter

    provider.add_span_processor(processor_cls(ConsoleSpanExporter(out=sys.stderr)))


def _add_otlp_exporter(provider: Any, processor_cls: Any, endpoint: str) -> None:
    """Attach the OTLP gRPC exporter."""
    try:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
    except ImportError as exc:
        msg = (
            "opentelemetry-exporter-otlp is required for OTLP export. "
            "Install it with: pip install rulebook[otel]"
        )
        raise ImportError(msg) from exc

    provider.add_span_processor(processor_cls(OTLPSpanExporter(endpoint=endpoint)))
