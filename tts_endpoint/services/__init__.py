"""Services: provider clients, endpoint controller, invocation proxy, idle monitor."""

from tts_endpoint.services.base_provider import BaseEndpointProvider, BaseLogProvider
from tts_endpoint.services.endpoint_controller import EndpointController
from tts_endpoint.services.idle_monitor import IdleMonitor
from tts_endpoint.services.invocation import InvocationProxy, serialize_params
from tts_endpoint.services.provider_factory import get_endpoint_provider, get_log_provider

__all__ = [
    "BaseEndpointProvider",
    "BaseLogProvider",
    "EndpointController",
    "IdleMonitor",
    "InvocationProxy",
    "serialize_params",
    "get_endpoint_provider",
    "get_log_provider",
]
