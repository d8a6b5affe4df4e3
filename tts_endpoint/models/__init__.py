"""Data models: Pydantic schemas and in-memory entities."""

from tts_endpoint.models.entities import (
    ActivityEvidence,
    IdleCheckResult,
    IdleDecision,
    InvocationResult,
    LaunchConfig,
)
from tts_endpoint.models.schemas import (
    KNOWN_ENDPOINT_STATUSES,
    ActivityEvidenceSchema,
    EndpointStatusResponse,
    ErrorResponse,
    IdleCheckResponse,
)

__all__ = [
    "ActivityEvidence",
    "IdleCheckResult",
    "IdleDecision",
    "InvocationResult",
    "LaunchConfig",
    "KNOWN_ENDPOINT_STATUSES",
    "ActivityEvidenceSchema",
    "EndpointStatusResponse",
    "ErrorResponse",
    "IdleCheckResponse",
]
