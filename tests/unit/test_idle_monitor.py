"""Unit tests for the idle monitor decision logic."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from tts_endpoint.core.errors import MalformedEvidenceError, ProviderUnavailableError
from tts_endpoint.models.entities import ActivityEvidence, IdleDecision
from tts_endpoint.services.endpoint_controller import EndpointController
from tts_endpoint.services.idle_monitor import IdleMonitor

NOW = datetime(2026, 10, 16, 12, 0, tzinfo=UTC)
WINDOW = timedelta(minutes=30)


def _ms(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


@pytest.fixture
def monitor(endpoint_provider, log_provider, log_group) -> IdleMonitor:
    endpoint_provider.set_status("mallows-tts", "InService")
    controller = EndpointController(endpoint_provider, "mallows-tts", "mallows-tts-config")
    return IdleMonitor(log_provider, controller, log_group, idle_window=WINDOW)


def _deletes(endpoint_provider) -> int:
    return sum(1 for c in endpoint_provider.calls if c[0] == "delete_endpoint")


def test_no_streams_does_not_delete(monitor, endpoint_provider) -> None:
    result = monitor.tick(now=NOW)
    assert result.decision is IdleDecision.ABSTAIN
    assert result.reason == "no_log_stream"
    assert _deletes(endpoint_provider) == 0


def test_stale_stream_deletes_exactly_once(monitor, endpoint_provider, log_provider, log_group) -> None:
    stale = NOW - WINDOW - timedelta(milliseconds=1)
    log_provider.add_stream(log_group, "AllTraffic/i-0abc", [_ms(stale - timedelta(hours=1)), _ms(stale)])

    result = monitor.tick(now=NOW)

    assert result.decision is IdleDecision.EVICTED
    assert result.evidence.stream_id == "AllTraffic/i-0abc"
    assert result.evidence.has_events is False
    assert _deletes(endpoint_provider) == 1
    assert "mallows-tts" not in endpoint_provider.statuses


def test_event_at_window_boundary_is_activity(monitor, endpoint_provider, log_provider, log_group) -> None:
    log_provider.add_stream(log_group, "AllTraffic/i-0abc", [_ms(NOW - WINDOW)])
    result = monitor.tick(now=NOW)
    assert result.decision is IdleDecision.ACTIVE
    assert _deletes(endpoint_provider) == 0


def test_recent_event_keeps_endpoint(monitor, endpoint_provider, log_provider, log_group) -> None:
    log_provider.add_stream(log_group, "AllTraffic/i-0abc", [_ms(NOW - timedelta(minutes=2))])
    assert monitor.tick(now=NOW).decision is IdleDecision.ACTIVE
    assert endpoint_provider.statuses["mallows-tts"] == "InService"


def test_queries_newest_stream_with_trailing_window(monitor, log_provider, log_group) -> None:
    log_provider.add_stream(log_group, "old", [_ms(NOW - timedelta(days=2))])
    log_provider.add_stream(log_group, "new", [_ms(NOW - timedelta(minutes=5))])

    monitor.tick(now=NOW)

    assert log_provider.calls[0] == ("list_streams", log_group, 1)
    assert log_provider.calls[1] == ("get_events", log_group, "new", _ms(NOW - WINDOW), 1)


def test_same_evidence_same_decision(monitor, log_provider, log_group) -> None:
    log_provider.add_stream(log_group, "s", [_ms(NOW - timedelta(minutes=10))])
    first = monitor.gather_evidence(NOW)
    second = monitor.gather_evidence(NOW)
    assert first == second
    assert IdleMonitor.decide(first) is IdleMonitor.decide(second) is IdleDecision.ACTIVE


def test_decide_is_pure() -> None:
    idle = ActivityEvidence("s", NOW - WINDOW, NOW, has_events=False)
    assert IdleMonitor.decide(idle) is IdleDecision.EVICTED
    assert IdleMonitor.decide(idle) is IdleDecision.EVICTED
    assert IdleMonitor.decide(None) is IdleDecision.ABSTAIN


def test_repeated_idle_ticks_report_already_absent(monitor, endpoint_provider, log_provider, log_group) -> None:
    log_provider.add_stream(log_group, "s", [_ms(NOW - timedelta(hours=3))])
    assert monitor.tick(now=NOW).decision is IdleDecision.EVICTED
    assert monitor.tick(now=NOW).decision is IdleDecision.ALREADY_ABSENT
    assert _deletes(endpoint_provider) == 2


@pytest.mark.parametrize(
    "error",
    [
        ProviderUnavailableError("describe_log_streams failed: throttled"),
        MalformedEvidenceError("log stream without logStreamName"),
        RuntimeError("unexpected shape"),
    ],
)
def test_evidence_errors_abstain_without_delete(monitor, endpoint_provider, log_provider, error) -> None:
    log_provider.error = error
    result = monitor.tick(now=NOW)
    assert result.decision is IdleDecision.ABSTAIN
    assert _deletes(endpoint_provider) == 0


def test_provider_unavailable_everywhere_never_raises(failing_provider, log_provider, log_group) -> None:
    log_provider.error = ProviderUnavailableError("timeout")
    controller = EndpointController(failing_provider, "mallows-tts", "mallows-tts-config")
    monitor = IdleMonitor(log_provider, controller, log_group, idle_window=WINDOW)

    result = monitor.tick(now=NOW)

    assert result.decision is IdleDecision.ABSTAIN
    assert result.reason == "ProviderUnavailable"
    assert "delete_endpoint" not in failing_provider.calls


def test_delete_failure_is_swallowed(failing_provider, log_provider, log_group) -> None:
    log_provider.add_stream(log_group, "s", [_ms(NOW - timedelta(hours=3))])
    controller = EndpointController(failing_provider, "mallows-tts", "mallows-tts-config")
    monitor = IdleMonitor(log_provider, controller, log_group, idle_window=WINDOW)

    result = monitor.tick(now=NOW)

    assert result.decision is IdleDecision.DELETE_FAILED
    assert failing_provider.calls == ["delete_endpoint"]


def test_tick_defaults_to_current_time(monitor, log_provider, log_group) -> None:
    log_provider.add_stream(log_group, "s", [_ms(datetime.now(UTC))])
    assert monitor.tick().decision is IdleDecision.ACTIVE


def test_naive_now_is_treated_as_utc(monitor, log_provider, log_group) -> None:
    log_provider.add_stream(log_group, "s", [_ms(NOW - timedelta(minutes=10))])

    result = monitor.tick(now=NOW.replace(tzinfo=None))

    assert result.decision is IdleDecision.ACTIVE
    assert result.evidence.window_end == NOW
    assert result.evidence.window_start == NOW - WINDOW


def test_offset_now_is_normalised_to_utc(monitor, log_provider, log_group) -> None:
    log_provider.add_stream(log_group, "s", [_ms(NOW - WINDOW - timedelta(minutes=1))])
    tokyo = timezone(timedelta(hours=9))

    result = monitor.tick(now=NOW.astimezone(tokyo))

    assert result.decision is IdleDecision.EVICTED
    assert result.evidence.window_end.utcoffset() == timedelta(0)
