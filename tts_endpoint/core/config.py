"""Application settings loaded from environment with validation."""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tts_endpoint.models.entities import LaunchConfig


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["json", "readable"]


class Settings(BaseSettings):
    """Controller settings from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Endpoint
    endpoint_name: str = Field(..., min_length=1, description="SageMaker endpoint name")
    endpoint_config_name: str = Field(
        ...,
        min_length=1,
        description="SageMaker endpoint configuration used to (re)create the endpoint",
    )

    # AWS
    aws_region: Optional[str] = Field(
        default=None,
        description="AWS region for SageMaker and CloudWatch Logs (boto default chain when unset)",
    )
    provider_timeout_seconds: int = Field(default=60, ge=1, le=300)
    provider_max_attempts: int = Field(
        default=1,
        ge=1,
        le=10,
        description="Total botocore attempts per call. 1 = provider errors surface immediately.",
    )

    # Invocation
    invoke_content_type: str = Field(default="application/json", min_length=1)
    invoke_accept: str = Field(
        default="audio/wav",
        min_length=1,
        description="Audio encoding requested from the endpoint",
    )

    # Idle monitor
    log_group_prefix: str = Field(
        default="/aws/sagemaker/Endpoints",
        min_length=1,
        description="CloudWatch log group prefix; the endpoint name is appended",
    )
    idle_window_minutes: int = Field(
        default=30,
        ge=1,
        le=1440,
        description="Trailing window inspected for log events before the endpoint is declared idle",
    )

    # API
    strict_error_status: bool = Field(
        default=True,
        description="Map each error kind to its own status code; false collapses all to 500",
    )
    internal_secret: str = Field(
        default="",
        description="Optional secret required in X-Internal-Secret for /internal routes",
    )

    # Logging / telemetry
    log_level: LogLevel = Field(default="INFO")
    log_format: LogFormat = Field(default="json")
    otel_console_export: bool = Field(default=False)

    # Launch configuration bootstrap (scripts/create_endpoint_config.py)
    model_name: str = Field(default="", description="SageMaker model name")
    image_uri: str = Field(default="", description="Inference container image URI")
    model_data_url: str = Field(default="", description="S3 URL of the model artifact tarball")
    instance_type: str = Field(default="ml.g4dn.xlarge")
    instance_count: int = Field(default=1, ge=1, le=10)
    execution_role_arn: str = Field(default="", description="IAM role SageMaker assumes for the model")

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
        u = (v or "INFO").upper()
        if u not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return u

    @field_validator("log_format", mode="before")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        return (v or "json").lower()

    @property
    def log_group_name(self) -> str:
        return f"{self.log_group_prefix.rstrip('/')}/{self.endpoint_name}"

    def launch_config(self) -> LaunchConfig:
        """Immutable launch configuration for bootstrapping the endpoint config."""
        return LaunchConfig(
            config_name=self.endpoint_config_name,
            model_name=self.model_name or self.endpoint_config_name,
            image_uri=self.image_uri,
            model_data_url=self.model_data_url,
            instance_type=self.instance_type,
            instance_count=self.instance_count,
            execution_role_arn=self.execution_role_arn,
        )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
