"""OpenTelemetry and Cloud Trace integration with in-process counters."""

from contextlib import contextmanager
from typing import Any, Generator, Optional

from opentelemetry import trace
from opentelemetry.exporter.cloud_trace import CloudTraceSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

SERVICE_NAME = "nordvpn-config-fetcher"

_COUNTERS = (
    "assignments_total",
    "no_available_host_total",
    "malformed_recommendations_total",
    "upstream_errors_total",
)

_metrics: dict[str, int] = {name: 0 for name in _COUNTERS}


def get_tracer(name: str = SERVICE_NAME) -> trace.Tracer:
    return trace.get_tracer(name)


def get_trace_context() -> dict[str, str]:
    """Return trace_id and span_id for current span (for log correlation)."""
    current = trace.get_current_span()
    if not current.is_recording():
        return {}
    ctx = current.get_span_context()
    return {"trace_id": format(ctx.trace_id, "032x"), "span_id": format(ctx.span_id, "016x")}


def init_telemetry(service_name: str = SERVICE_NAME, project_id: Optional[str] = None) -> bool:
    """Install a Cloud Trace exporting tracer provider. No-op without a project id."""
    if not project_id:
        return False
    resource = Resource.create({"service.name": service_name})
    provider = TracerProvider(resource=resource)
    provider.add_span_processor(BatchSpanProcessor(CloudTraceSpanExporter(project_id=project_id)))
    trace.set_tracer_provider(provider)
    return True


def instrument_fastapi(app: Any) -> None:
    """Instrument FastAPI app for automatic tracing."""
    FastAPIInstrumentor.instrument_app(app)


def _incr(name: str) -> None:
    _metrics[name] = _metrics.get(name, 0) + 1


def record_assignment() -> None:
    _incr("assignments_total")


def record_no_available_host() -> None:
    _incr("no_available_host_total")


def record_malformed_recommendation() -> None:
    _incr("malformed_recommendations_total")


def record_upstream_error() -> None:
    _incr("upstream_errors_total")


def get_metrics() -> dict[str, int]:
    """Return current counter snapshot."""
    return dict(_metrics)


def reset_metrics() -> None:
    for name in _COUNTERS:
        _metrics[name] = 0


@contextmanager
def span(name: str, attributes: Optional[dict[str, Any]] = None) -> Generator[trace.Span, None, None]:
    """Context manager for a child span."""
    with get_tracer().start_as_current_span(name) as span_obj:
        if attributes:
            for key, val in attributes.items():
                span_obj.set_attribute(key, str(val))
        yield span_obj
