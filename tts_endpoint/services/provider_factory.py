"""Process-wide, read-only provider clients built from settings."""

from functools import lru_cache
from typing import Any

import boto3
from botocore.config import Config

from tts_endpoint.core.config import Settings, get_settings
from tts_endpoint.services.base_provider import BaseEndpointProvider, BaseLogProvider
from tts_endpoint.services.cloudwatch_logs import CloudWatchLogsProvider
from tts_endpoint.services.sagemaker import SageMakerProvider


def _client_config(settings: Settings) -> Config:
    return Config(
        region_name=settings.aws_region,
        connect_timeout=min(settings.provider_timeout_seconds, 10),
        read_timeout=settings.provider_timeout_seconds,
        retries={"total_max_attempts": settings.provider_max_attempts, "mode": "standard"},
    )


def build_boto3_client(service_name: str, settings: Settings) -> Any:
    session = boto3.Session(region_name=settings.aws_region)
    return session.client(service_name, config=_client_config(settings))


def build_endpoint_provider(settings: Settings) -> BaseEndpointProvider:
    return SageMakerProvider(
        sagemaker_client=build_boto3_client("sagemaker", settings),
        runtime_client=build_boto3_client("sagemaker-runtime", settings),
    )


def build_log_provider(settings: Settings) -> BaseLogProvider:
    return CloudWatchLogsProvider(logs_client=build_boto3_client("logs", settings))


@lru_cache
def get_endpoint_provider() -> BaseEndpointProvider:
    """Return the cached endpoint provider (constructed once per process)."""
    return build_endpoint_provider(get_settings())


@lru_cache
def get_log_provider() -> BaseLogProvider:
    """Return the cached log provider (constructed once per process)."""
    return build_log_provider(get_settings())
