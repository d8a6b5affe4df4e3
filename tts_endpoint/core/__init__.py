"""Core configuration, logging, errors, and telemetry."""

from tts_endpoint.core.config import Settings, get_settings
from tts_endpoint.core.errors import (
    ControllerError,
    EndpointAlreadyExistsError,
    EndpointNotFoundError,
    EndpointNotReadyError,
    MalformedEvidenceError,
    ProviderUnavailableError,
    UnauthorizedError,
)
from tts_endpoint.core.logging import configure_logging, structured_log
from tts_endpoint.core.telemetry import (
    get_metrics,
    init_telemetry,
    instrument_fastapi,
    record_endpoint_created,
    record_endpoint_deleted,
    record_idle_check,
    record_invocation,
    record_provider_api_error,
    span,
)

__all__ = [
    "Settings",
    "get_settings",
    "ControllerError",
    "ProviderUnavailableError",
    "EndpointNotFoundError",
    "EndpointAlreadyExistsError",
    "EndpointNotReadyError",
    "MalformedEvidenceError",
    "UnauthorizedError",
    "configure_logging",
    "structured_log",
    "init_telemetry",
    "instrument_fastapi",
    "get_metrics",
    "record_endpoint_created",
    "record_endpoint_deleted",
    "record_invocation",
    "record_provider_api_error",
    "record_idle_check",
    "span",
]
