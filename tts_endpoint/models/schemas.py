"""Pydantic response models for the HTTP surface."""

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field


# Statuses the provider documents. Anything else is still relayed verbatim.
KNOWN_ENDPOINT_STATUSES = (
    "OutOfService",
    "Creating",
    "Updating",
    "SystemUpdating",
    "RollingBack",
    "InService",
    "Deleting",
    "Failed",
    "UpdateRollbackFailed",
)


class EndpointStatusResponse(BaseModel):
    """GET / response: raw provider status."""

    status: str = Field(..., description="Endpoint status exactly as reported by the provider")


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


class ActivityEvidenceSchema(BaseModel):
    stream_id: str
    window_start: datetime
    window_end: datetime
    has_events: bool


class IdleCheckResponse(BaseModel):
    """POST /internal/idle-check response."""

    decision: Literal["abstain", "active", "evicted", "already_absent", "delete_failed"]
    evidence: Optional[ActivityEvidenceSchema] = None
    reason: Optional[str] = None
