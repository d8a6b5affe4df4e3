"""FastAPI dependencies: per-request components over process-wide provider clients."""

from datetime import timedelta
from typing import Annotated, Optional

from fastapi import Depends, Header

from tts_endpoint.core.config import Settings, get_settings
from tts_endpoint.core.errors import UnauthorizedError
from tts_endpoint.services.base_provider import BaseEndpointProvider, BaseLogProvider
from tts_endpoint.services.endpoint_controller import EndpointController
from tts_endpoint.services.idle_monitor import IdleMonitor
from tts_endpoint.services.invocation import InvocationProxy
from tts_endpoint.services.provider_factory import get_endpoint_provider, get_log_provider


def get_controller(
    settings: Annotated[Settings, Depends(get_settings)],
    provider: Annotated[BaseEndpointProvider, Depends(get_endpoint_provider)],
) -> EndpointController:
    return EndpointController(
        provider=provider,
        endpoint_name=settings.endpoint_name,
        endpoint_config_name=settings.endpoint_config_name,
    )


def get_invocation_proxy(
    settings: Annotated[Settings, Depends(get_settings)],
    provider: Annotated[BaseEndpointProvider, Depends(get_endpoint_provider)],
) -> InvocationProxy:
    return InvocationProxy(
        provider=provider,
        endpoint_name=settings.endpoint_name,
        content_type=settings.invoke_content_type,
        accept=settings.invoke_accept,
    )


def get_idle_monitor(
    settings: Annotated[Settings, Depends(get_settings)],
    log_provider: Annotated[BaseLogProvider, Depends(get_log_provider)],
    controller: Annotated[EndpointController, Depends(get_controller)],
) -> IdleMonitor:
    return IdleMonitor(
        log_provider=log_provider,
        controller=controller,
        log_group=settings.log_group_name,
        idle_window=timedelta(minutes=settings.idle_window_minutes),
    )


def verify_internal_secret(
    settings: Annotated[Settings, Depends(get_settings)],
    x_internal_secret: Annotated[Optional[str], Header(alias="X-Internal-Secret")] = None,
) -> None:
    """Require the shared secret on /internal routes when one is configured."""
    if not settings.internal_secret:
        return
    if x_internal_secret != settings.internal_secret:
        raise UnauthorizedError()
