from abc import ABC, abstractmethod
from typing import Any, Optional, TypedDict

from tts_endpoint.models.entities import InvocationResult, LaunchConfig


class LogEvent(TypedDict):
    timestamp: int
    message: str


class BaseEndpointProvider(ABC):
    """
    Abstract base class for inference-hosting providers.
    The controller only relays; the provider owns the endpoint state machine.
    """

    @abstractmethod
    def create_endpoint(self, name: str, config_name: str) -> None:
        """Request creation of an endpoint from an existing launch configuration."""

    @abstractmethod
    def delete_endpoint(self, name: str) -> None:
        """Request teardown of an endpoint."""

    @abstractmethod
    def describe_endpoint(self, name: str) -> str:
        """Return the raw provider status of an endpoint."""

    @abstractmethod
    def invoke_endpoint(
        self,
        name: str,
        body: bytes,
        content_type: str,
        accept: str,
    ) -> InvocationResult:
        """Run inference and return the raw response payload."""

    @abstractmethod
    def create_launch_config(self, config: LaunchConfig) -> dict[str, Any]:
        """Create the model and endpoint configuration an endpoint is launched from."""


class BaseLogProvider(ABC):
    """Abstract base class for the log service holding endpoint activity."""

    @abstractmethod
    def list_streams(self, log_group: str, limit: int = 1) -> list[str]:
        """Stream names ordered by most recent event, newest first."""

    @abstractmethod
    def get_events(
        self,
        log_group: str,
        stream_id: str,
        start_time_ms: int,
        limit: int = 1,
        end_time_ms: Optional[int] = None,
    ) -> list[LogEvent]:
        """Events at or after start_time_ms, oldest first."""
