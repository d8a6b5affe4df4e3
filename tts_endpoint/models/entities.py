"""In-memory entity models: launch configuration, activity evidence, invocation result."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional


@dataclass(frozen=True)
class LaunchConfig:
    """How to (re)create the endpoint. Owned by configuration."""

    config_name: str
    model_name: str
    image_uri: str
    model_data_url: str
    instance_type: str
    instance_count: int = 1
    execution_role_arn: str = ""
    variant_name: str = "AllTraffic"

    def missing_fields(self) -> list[str]:
        """Names of fields required to bootstrap the config that are still empty."""
        required = {
            "image_uri": self.image_uri,
            "model_data_url": self.model_data_url,
            "execution_role_arn": self.execution_role_arn,
        }
        return [name for name, value in required.items() if not value]

    def to_model_request(self) -> dict[str, Any]:
        return {
            "ModelName": self.model_name,
            "ExecutionRoleArn": self.execution_role_arn,
            "PrimaryContainer": {
                "Image": self.image_uri,
                "ModelDataUrl": self.model_data_url,
            },
        }

    def to_endpoint_config_request(self) -> dict[str, Any]:
        return {
            "EndpointConfigName": self.config_name,
            "ProductionVariants": [
                {
                    "VariantName": self.variant_name,
                    "ModelName": self.model_name,
                    "InstanceType": self.instance_type,
                    "InitialInstanceCount": self.instance_count,
                },
            ],
        }


@dataclass(frozen=True)
class ActivityEvidence:
    """Presence of log events in the trailing idle window. Recomputed every tick."""

    stream_id: str
    window_start: datetime
    window_end: datetime
    has_events: bool


@dataclass(frozen=True)
class InvocationResult:
    """Opaque endpoint output and its declared content type."""

    body: bytes
    content_type: str


class IdleDecision(str, Enum):
    """Outcome of one idle monitor tick."""

    ABSTAIN = "abstain"
    ACTIVE = "active"
    EVICTED = "evicted"
    ALREADY_ABSENT = "already_absent"
    DELETE_FAILED = "delete_failed"


@dataclass(frozen=True)
class IdleCheckResult:
    decision: IdleDecision
    evidence: Optional[ActivityEvidence] = None
    reason: Optional[str] = None
