"""Idle monitor: evict the endpoint when its log channel has gone quiet.

"No log events in the trailing window" stands in for "no inference
traffic". Every tick recomputes its evidence from the log service; nothing is
carried between ticks. Ambiguous evidence always resolves to doing nothing:
the monitor never deletes on an error and never raises.
"""

from datetime import UTC, datetime, timedelta
from typing import Optional

from tts_endpoint.core.errors import ControllerError, EndpointNotFoundError
from tts_endpoint.core.logging import structured_log
from tts_endpoint.core.telemetry import record_idle_check, span
from tts_endpoint.models.entities import ActivityEvidence, IdleCheckResult, IdleDecision
from tts_endpoint.services.base_provider import BaseLogProvider
from tts_endpoint.services.endpoint_controller import EndpointController


def _to_epoch_ms(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def _as_utc(moment: datetime) -> datetime:
    """Naive datetimes are taken to be UTC, never local time."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


class IdleMonitor:
    def __init__(
        self,
        log_provider: BaseLogProvider,
        controller: EndpointController,
        log_group: str,
        idle_window: timedelta = timedelta(minutes=30),
    ) -> None:
        self._logs = log_provider
        self._controller = controller
        self.log_group = log_group
        self.idle_window = idle_window

    def gather_evidence(self, now: datetime) -> Optional[ActivityEvidence]:
        """
        Look for at least one event in the newest stream within the window.
        Returns None when there is no stream yet (an endpoint still spinning up).
        Provider and shape errors propagate to the caller.
        """
        now = _as_utc(now)
        streams = self._logs.list_streams(self.log_group, limit=1)
        if not streams:
            return None
        stream_id = streams[0]
        window_start = now - self.idle_window
        events = self._logs.get_events(
            self.log_group,
            stream_id,
            start_time_ms=_to_epoch_ms(window_start),
            limit=1,
        )
        return ActivityEvidence(
            stream_id=stream_id,
            window_start=window_start,
            window_end=now,
            has_events=len(events) > 0,
        )

    @staticmethod
    def decide(evidence: Optional[ActivityEvidence]) -> IdleDecision:
        """Pure decision on a fixed evidence snapshot."""
        if evidence is None:
            return IdleDecision.ABSTAIN
        if evidence.has_events:
            return IdleDecision.ACTIVE
        return IdleDecision.EVICTED

    def tick(self, now: Optional[datetime] = None) -> IdleCheckResult:
        """Run one scheduled check. Never raises."""
        now = _as_utc(now) if now is not None else datetime.now(UTC)
        endpoint_name = self._controller.endpoint_name
        with span("idle_monitor.tick", {"endpoint_name": endpoint_name, "log_group": self.log_group}):
            try:
                evidence = self.gather_evidence(now)
            except Exception as exc:
                error_code = exc.error_code if isinstance(exc, ControllerError) else type(exc).__name__
                structured_log(
                    "WARNING",
                    "Idle check abstained: evidence unavailable",
                    endpoint_name=endpoint_name,
                    operation="idle_monitor.tick",
                    metadata={"log_group": self.log_group},
                    error={"type": error_code, "message": str(exc)},
                )
                record_idle_check(evicted=False)
                return IdleCheckResult(decision=IdleDecision.ABSTAIN, reason=error_code)

            decision = self.decide(evidence)
            if decision is IdleDecision.ABSTAIN:
                structured_log(
                    "INFO",
                    "Idle check abstained: no log stream yet",
                    endpoint_name=endpoint_name,
                    operation="idle_monitor.tick",
                    metadata={"log_group": self.log_group},
                )
                record_idle_check(evicted=False)
                return IdleCheckResult(decision=decision, reason="no_log_stream")

            if decision is IdleDecision.ACTIVE:
                structured_log(
                    "INFO",
                    "Endpoint active within idle window",
                    endpoint_name=endpoint_name,
                    operation="idle_monitor.tick",
                    metadata={"stream": evidence.stream_id, "window_start": evidence.window_start.isoformat()},
                )
                record_idle_check(evicted=False)
                return IdleCheckResult(decision=decision, evidence=evidence)

            return self._evict(evidence)

    def _evict(self, evidence: ActivityEvidence) -> IdleCheckResult:
        endpoint_name = self._controller.endpoint_name
        metadata = {"stream": evidence.stream_id, "window_start": evidence.window_start.isoformat()}
        try:
            self._controller.delete()
        except EndpointNotFoundError:
            structured_log(
                "INFO",
                "Idle endpoint already absent",
                endpoint_name=endpoint_name,
                operation="idle_monitor.evict",
                metadata=metadata,
            )
            record_idle_check(evicted=False)
            return IdleCheckResult(decision=IdleDecision.ALREADY_ABSENT, evidence=evidence)
        except Exception as exc:
            structured_log(
                "ERROR",
                "Idle endpoint deletion failed; retrying next tick",
                endpoint_name=endpoint_name,
                operation="idle_monitor.evict",
                metadata=metadata,
                error={"type": type(exc).__name__, "message": str(exc)},
            )
            record_idle_check(evicted=False)
            return IdleCheckResult(
                decision=IdleDecision.DELETE_FAILED,
                evidence=evidence,
                reason=type(exc).__name__,
            )
        structured_log(
            "INFO",
            f"Endpoint idle for {int(self.idle_window.total_seconds() // 60)} minutes; deletion requested",
            endpoint_name=endpoint_name,
            operation="idle_monitor.evict",
            metadata=metadata,
        )
        record_idle_check(evicted=True)
        return IdleCheckResult(decision=IdleDecision.EVICTED, evidence=evidence)
