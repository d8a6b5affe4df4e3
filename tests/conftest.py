"""Pytest configuration and shared fixtures."""

import os
from typing import Optional

import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("ENDPOINT_NAME", "mallows-tts")
os.environ.setdefault("ENDPOINT_CONFIG_NAME", "mallows-tts-config")
os.environ.setdefault("LOG_FORMAT", "readable")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")

from tts_endpoint.core.config import get_settings  # noqa: E402
from tts_endpoint.core.errors import (  # noqa: E402
    EndpointAlreadyExistsError,
    EndpointNotFoundError,
    EndpointNotReadyError,
    ProviderUnavailableError,
)
from tts_endpoint.models.entities import InvocationResult, LaunchConfig  # noqa: E402
from tts_endpoint.services.base_provider import (  # noqa: E402
    BaseEndpointProvider,
    BaseLogProvider,
    LogEvent,
)


class FakeEndpointProvider(BaseEndpointProvider):
    """In-memory provider: owns endpoint status the way SageMaker does."""

    def __init__(
        self,
        audio: bytes = b"RIFF\x24\x00\x00\x00WAVEfmt ",
        content_type: str = "audio/wav",
    ) -> None:
        self.statuses: dict[str, str] = {}
        self.calls: list[tuple] = []
        self.audio = audio
        self.content_type = content_type

    def set_status(self, name: str, status: Optional[str]) -> None:
        if status is None:
            self.statuses.pop(name, None)
        else:
            self.statuses[name] = status

    def create_endpoint(self, name: str, config_name: str) -> None:
        self.calls.append(("create_endpoint", name, config_name))
        if name in self.statuses:
            raise EndpointAlreadyExistsError(name)
        self.statuses[name] = "Creating"

    def delete_endpoint(self, name: str) -> None:
        self.calls.append(("delete_endpoint", name))
        if name not in self.statuses:
            raise EndpointNotFoundError(name)
        del self.statuses[name]

    def describe_endpoint(self, name: str) -> str:
        self.calls.append(("describe_endpoint", name))
        if name not in self.statuses:
            raise EndpointNotFoundError(name)
        return self.statuses[name]

    def invoke_endpoint(self, name: str, body: bytes, content_type: str, accept: str) -> InvocationResult:
        self.calls.append(("invoke_endpoint", name, body, content_type, accept))
        if self.statuses.get(name) != "InService":
            raise EndpointNotReadyError(name)
        return InvocationResult(body=self.audio, content_type=self.content_type)

    def create_launch_config(self, config: LaunchConfig) -> dict:
        self.calls.append(("create_launch_config", config.config_name))
        return {"created": ["model", "endpoint_config"], "existing": []}


class FailingEndpointProvider(BaseEndpointProvider):
    """Every call fails as if the provider were unreachable."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def _fail(self, operation: str):
        self.calls.append(operation)
        raise ProviderUnavailableError(f"{operation} failed: connection refused", details={"operation": operation})

    def create_endpoint(self, name: str, config_name: str) -> None:
        self._fail("create_endpoint")

    def delete_endpoint(self, name: str) -> None:
        self._fail("delete_endpoint")

    def describe_endpoint(self, name: str) -> str:
        return self._fail("describe_endpoint")

    def invoke_endpoint(self, name: str, body: bytes, content_type: str, accept: str) -> InvocationResult:
        return self._fail("invoke_endpoint")

    def create_launch_config(self, config: LaunchConfig) -> dict:
        return self._fail("create_launch_config")


class FakeLogProvider(BaseLogProvider):
    """Log groups -> streams -> event timestamps (epoch ms), newest stream first."""

    def __init__(self) -> None:
        self.streams: dict[str, dict[str, list[int]]] = {}
        self.calls: list[tuple] = []
        self.error: Optional[Exception] = None

    def add_stream(self, log_group: str, stream_id: str, timestamps: list[int]) -> None:
        self.streams.setdefault(log_group, {})[stream_id] = sorted(timestamps)

    def list_streams(self, log_group: str, limit: int = 1) -> list[str]:
        self.calls.append(("list_streams", log_group, limit))
        if self.error is not None:
            raise self.error
        group = self.streams.get(log_group, {})
        ordered = sorted(group, key=lambda s: max(group[s], default=0), reverse=True)
        return ordered[:limit]

    def get_events(
        self,
        log_group: str,
        stream_id: str,
        start_time_ms: int,
        limit: int = 1,
        end_time_ms: Optional[int] = None,
    ) -> list[LogEvent]:
        self.calls.append(("get_events", log_group, stream_id, start_time_ms, limit))
        timestamps = self.streams.get(log_group, {}).get(stream_id, [])
        matched = [
            ts for ts in timestamps
            if ts >= start_time_ms and (end_time_ms is None or ts <= end_time_ms)
        ]
        return [LogEvent(timestamp=ts, message="invocation") for ts in matched[:limit]]


@pytest.fixture(autouse=True)
def fresh_settings() -> None:
    """Settings are cached per process; re-read the environment for every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def endpoint_provider() -> FakeEndpointProvider:
    return FakeEndpointProvider()


@pytest.fixture
def failing_provider() -> FailingEndpointProvider:
    return FailingEndpointProvider()


@pytest.fixture
def log_provider() -> FakeLogProvider:
    return FakeLogProvider()


@pytest.fixture
def log_group() -> str:
    return "/aws/sagemaker/Endpoints/mallows-tts"


def _make_client(endpoint_provider: BaseEndpointProvider, log_provider: BaseLogProvider) -> TestClient:
    from tts_endpoint.main import app
    from tts_endpoint.services.provider_factory import get_endpoint_provider, get_log_provider

    app.dependency_overrides[get_endpoint_provider] = lambda: endpoint_provider
    app.dependency_overrides[get_log_provider] = lambda: log_provider
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def client(endpoint_provider: FakeEndpointProvider, log_provider: FakeLogProvider) -> TestClient:
    """FastAPI test client with in-memory providers."""
    from tts_endpoint.main import app

    yield _make_client(endpoint_provider, log_provider)
    app.dependency_overrides.clear()


@pytest.fixture
def failing_client(failing_provider: FailingEndpointProvider, log_provider: FakeLogProvider) -> TestClient:
    """FastAPI test client whose endpoint and log providers are unreachable."""
    from tts_endpoint.main import app

    log_provider.error = ProviderUnavailableError("describe_log_streams failed: timeout")
    yield _make_client(failing_provider, log_provider)
    app.dependency_overrides.clear()
