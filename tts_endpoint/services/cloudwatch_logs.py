"""CloudWatch Logs client for endpoint activity evidence."""

from typing import Any, Optional

from botocore.exceptions import BotoCoreError, ClientError

from tts_endpoint.core.errors import MalformedEvidenceError
from tts_endpoint.core.telemetry import span
from tts_endpoint.services.aws_errors import error_code, provider_unavailable
from tts_endpoint.services.base_provider import BaseLogProvider, LogEvent


class CloudWatchLogsProvider(BaseLogProvider):
    """Log provider backed by a boto3 ``logs`` client."""

    def __init__(self, logs_client: Any) -> None:
        self._logs = logs_client

    def list_streams(self, log_group: str, limit: int = 1) -> list[str]:
        with span("logs.describe_log_streams", {"log_group": log_group}):
            try:
                resp = self._logs.describe_log_streams(
                    logGroupName=log_group,
                    orderBy="LastEventTime",
                    descending=True,
                    limit=limit,
                )
            except ClientError as exc:
                # The group only appears once the endpoint has logged something
                if error_code(exc) == "ResourceNotFoundException":
                    return []
                raise provider_unavailable(exc, "describe_log_streams") from exc
            except BotoCoreError as exc:
                raise provider_unavailable(exc, "describe_log_streams") from exc

        streams = resp.get("logStreams")
        if streams is None:
            return []
        if not isinstance(streams, list):
            raise MalformedEvidenceError(
                "describe_log_streams returned a non-list logStreams",
                details={"log_group": log_group},
            )
        names: list[str] = []
        for stream in streams:
            name = stream.get("logStreamName") if isinstance(stream, dict) else None
            if not name:
                raise MalformedEvidenceError(
                    "log stream without logStreamName",
                    details={"log_group": log_group},
                )
            names.append(name)
        return names

    def get_events(
        self,
        log_group: str,
        stream_id: str,
        start_time_ms: int,
        limit: int = 1,
        end_time_ms: Optional[int] = None,
    ) -> list[LogEvent]:
        params: dict[str, Any] = {
            "logGroupName": log_group,
            "logStreamName": stream_id,
            "startTime": start_time_ms,
            "limit": limit,
            "startFromHead": True,
        }
        if end_time_ms is not None:
            params["endTime"] = end_time_ms
        with span("logs.get_log_events", {"log_group": log_group, "stream": stream_id}):
            try:
                resp = self._logs.get_log_events(**params)
            except (ClientError, BotoCoreError) as exc:
                raise provider_unavailable(exc, "get_log_events") from exc

        events = resp.get("events")
        if not isinstance(events, list):
            raise MalformedEvidenceError(
                "get_log_events returned no events list",
                details={"log_group": log_group, "stream": stream_id},
            )
        return [
            LogEvent(timestamp=int(e.get("timestamp", 0)), message=str(e.get("message", "")))
            for e in events
            if isinstance(e, dict)
        ]
