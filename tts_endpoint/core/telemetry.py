"""OpenTelemetry tracing and in-process counters."""

from contextlib import contextmanager
from threading import Lock
from typing import Any, Generator, Optional

from opentelemetry import trace
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

SERVICE_NAME = "tts-endpoint-controller"

_metrics: dict[str, list[float] | int] = {
    "endpoints_created_total": 0,
    "endpoints_deleted_total": 0,
    "invocations_total": 0,
    "invocation_duration_seconds": [],
    "provider_api_errors_total": 0,
    "idle_checks_total": 0,
    "idle_evictions_total": 0,
}
_metrics_lock = Lock()
_MAX_SAMPLES = 1000


def init_telemetry(service_name: str = SERVICE_NAME, console_export: bool = False) -> None:
    """Install a tracer provider; spans go to stdout when console_export is set."""
    resource = Resource.create({"service.name": service_name})
    provider = TracerProvider(resource=resource)
    if console_export:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
    trace.set_tracer_provider(provider)


def instrument_fastapi(app: Any) -> None:
    """Instrument FastAPI app for automatic request spans."""
    FastAPIInstrumentor.instrument_app(app)


def _increment(key: str) -> None:
    with _metrics_lock:
        _metrics[key] = int(_metrics.get(key, 0)) + 1


def record_endpoint_created() -> None:
    _increment("endpoints_created_total")


def record_endpoint_deleted() -> None:
    _increment("endpoints_deleted_total")


def record_invocation(seconds: float) -> None:
    """Count an invocation and keep its duration for percentiles."""
    with _metrics_lock:
        _metrics["invocations_total"] = int(_metrics.get("invocations_total", 0)) + 1
        samples = _metrics.setdefault("invocation_duration_seconds", [])
        samples.append(seconds)
        del samples[:-_MAX_SAMPLES]


def record_provider_api_error() -> None:
    _increment("provider_api_errors_total")


def record_idle_check(evicted: bool) -> None:
    _increment("idle_checks_total")
    if evicted:
        _increment("idle_evictions_total")


def get_metrics() -> dict[str, Any]:
    """Return current metrics snapshot (for /metrics or tests)."""
    out: dict[str, Any] = {}
    with _metrics_lock:
        for k, v in _metrics.items():
            if isinstance(v, list):
                out[k] = {"count": len(v), "sum": sum(v), "values": list(v)}
            else:
                out[k] = v
    return out


@contextmanager
def span(name: str, attributes: Optional[dict[str, Any]] = None) -> Generator[Any, None, None]:
    """Context manager for a child span."""
    tracer = trace.get_tracer(SERVICE_NAME)
    with tracer.start_as_current_span(name) as span_obj:
        if attributes:
            for key, val in attributes.items():
                span_obj.set_attribute(key, str(val))
        yield span_obj
