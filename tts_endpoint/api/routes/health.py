"""Liveness and metrics endpoints."""

from fastapi import APIRouter

from tts_endpoint.core.telemetry import get_metrics

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict:
    """Liveness: no provider call."""
    return {"status": "ok"}


def _percentile(values: list[float], p: float) -> float:
    if not values:
        return 0.0
    sorted_vals = sorted(values)
    idx = int((len(sorted_vals) - 1) * p)
    return round(sorted_vals[idx], 4)


@router.get("/metrics")
async def metrics() -> dict:
    """Simple JSON metrics endpoint for operational visibility."""
    snapshot = get_metrics()
    durations = snapshot.get("invocation_duration_seconds", {}).get("values", [])
    return {
        "endpoints_created_total": snapshot.get("endpoints_created_total", 0),
        "endpoints_deleted_total": snapshot.get("endpoints_deleted_total", 0),
        "invocations_total": snapshot.get("invocations_total", 0),
        "provider_api_errors_total": snapshot.get("provider_api_errors_total", 0),
        "idle_checks_total": snapshot.get("idle_checks_total", 0),
        "idle_evictions_total": snapshot.get("idle_evictions_total", 0),
        "invocation_duration_seconds": {
            "count": len(durations),
            "p50": _percentile(durations, 0.50),
            "p95": _percentile(durations, 0.95),
            "sum": round(float(sum(durations)), 4),
        },
    }
