"""Internal routes: scheduled idle check."""

from typing import Annotated

from fastapi import APIRouter, Depends

from tts_endpoint.api.dependencies import get_idle_monitor, verify_internal_secret
from tts_endpoint.models.schemas import ActivityEvidenceSchema, IdleCheckResponse
from tts_endpoint.services.idle_monitor import IdleMonitor

router = APIRouter(prefix="/internal", tags=["internal"])


@router.post(
    "/idle-check",
    response_model=IdleCheckResponse,
    dependencies=[Depends(verify_internal_secret)],
)
def idle_check(
    monitor: Annotated[IdleMonitor, Depends(get_idle_monitor)],
) -> IdleCheckResponse:
    """
    Called by the scheduler every few minutes. Always 200: the monitor resolves
    every evidence failure to "abstain" so the scheduler never retries a tick.
    """
    result = monitor.tick()
    evidence = None
    if result.evidence is not None:
        evidence = ActivityEvidenceSchema(
            stream_id=result.evidence.stream_id,
            window_start=result.evidence.window_start,
            window_end=result.evidence.window_end,
            has_events=result.evidence.has_events,
        )
    return IdleCheckResponse(decision=result.decision.value, evidence=evidence, reason=result.reason)
