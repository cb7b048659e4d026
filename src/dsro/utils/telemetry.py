"""Tracing for the dsro solvers.

Each solver call opens one span (``dsro.solve_gossip`` or
``dsro.solve_blackboard``) and records the ``ATTR_*`` keys below on it.
Without a configured provider the OpenTelemetry API hands out no-op
tracers, so the solvers never check whether tracing is on.
:func:`configure_telemetry` installs a real provider once per process and
needs the ``otel`` extra.
"""

from __future__ import annotations

from typing import Any

from opentelemetry import trace

# ---------------------------------------------------------------------------
# Semantic attribute keys used throughout dsro instrumentation
# ---------------------------------------------------------------------------

ATTR_PROTOCOL = "dsro.protocol"
ATTR_AGENTS = "dsro.agents"
ATTR_RESOURCES = "dsro.resources"
ATTR_EDGES = "dsro.topology.edges"
ATTR_CLUSTER_SIZE = "dsro.cluster_size"
ATTR_MAX_CYCLES = "dsro.max_cycles"
ATTR_CYCLES = "dsro.cycles"
ATTR_MESSAGES = "dsro.messages"
ATTR_COST = "dsro.cost"
ATTR_FEASIBLE = "dsro.feasible"
ATTR_RUN_NAME = "dsro.run.name"

_INSTRUMENTATION_NAME = "dsro"


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Return a tracer for *name*; a no-op tracer until telemetry is configured."""
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def configure_telemetry(*, run_name: str = "", otlp_endpoint: str | None = None) -> Any:
    """Install a tracer provider for one ``dsro`` run (requires ``dsro[otel]``).

    Spans go to *otlp_endpoint* over OTLP/gRPC when it is set, otherwise
    to stdout as JSON.  The resource carries the package version and the
    run name, so spans of several runs can be told apart in one collector.
    Returns the installed provider.

    Raises:
        ImportError: If ``opentelemetry-sdk`` (or, with an endpoint, the
            OTLP exporter) is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace.export import (  # pyright: ignore[reportMissingImports]
            BatchSpanProcessor,
            ConsoleSpanExporter,
            SimpleSpanProcessor,
        )
    except ImportError as exc:
        msg = (
            "opentelemetry-sdk is required for configure_telemetry(). "
            "Install it with: pip install dsro[otel]"
        )
        raise ImportError(msg) from exc

    from dsro import __version__

    resource = Resource.create(
        {
            "service.name": _INSTRUMENTATION_NAME,
            "service.version": __version__,
            ATTR_RUN_NAME: run_name or "(unnamed)",
        }
    )
    provider = TracerProvider(resource=resource)

    if otlp_endpoint:
        try:
            from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (  # pyright: ignore[reportMissingImports]
                OTLPSpanExporter,
            )
        except ImportError as exc:
            msg = (
                "opentelemetry-exporter-otlp is required for OTLP export. "
                "Install it with: pip install dsro[otel]"
            )
            raise ImportError(msg) from exc
        provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint)))
    else:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)
    return provider
