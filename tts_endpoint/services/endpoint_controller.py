"""Endpoint lifecycle relay: create, describe and delete the configured endpoint.

The provider owns the endpoint state machine. This controller never caches
or advances status; every call is one provider round trip, and provider
errors surface immediately in the controller's taxonomy.
"""

import time

from tts_endpoint.core.errors import ControllerError
from tts_endpoint.core.logging import structured_log
from tts_endpoint.core.telemetry import record_endpoint_created, record_endpoint_deleted
from tts_endpoint.models.schemas import KNOWN_ENDPOINT_STATUSES
from tts_endpoint.services.base_provider import BaseEndpointProvider


class EndpointController:
    def __init__(
        self,
        provider: BaseEndpointProvider,
        endpoint_name: str,
        endpoint_config_name: str,
    ) -> None:
        self._provider = provider
        self.endpoint_name = endpoint_name
        self.endpoint_config_name = endpoint_config_name

    def _log(self, level: str, msg: str, operation: str, started: float, **kwargs: object) -> None:
        structured_log(
            level,
            msg,
            endpoint_name=self.endpoint_name,
            operation=operation,
            duration_ms=(time.perf_counter() - started) * 1000,
            metadata=kwargs or None,
        )

    def _log_failure(self, exc: ControllerError, operation: str, started: float) -> None:
        self._log(
            "WARNING",
            f"{operation} failed: {exc.message}",
            operation,
            started,
            error_code=exc.error_code,
        )

    def describe(self) -> str:
        """Return the raw provider status of the endpoint."""
        started = time.perf_counter()
        try:
            status = self._provider.describe_endpoint(self.endpoint_name)
        except ControllerError as exc:
            self._log_failure(exc, "endpoint.describe", started)
            raise
        if status not in KNOWN_ENDPOINT_STATUSES:
            self._log("WARNING", f"Unrecognised endpoint status: {status}", "endpoint.describe", started)
        else:
            self._log("DEBUG", "Endpoint described", "endpoint.describe", started, status=status)
        return status

    def create(self) -> None:
        """Request endpoint creation. Returns once the provider accepts, not when InService."""
        started = time.perf_counter()
        try:
            self._provider.create_endpoint(self.endpoint_name, self.endpoint_config_name)
        except ControllerError as exc:
            self._log_failure(exc, "endpoint.create", started)
            raise
        record_endpoint_created()
        self._log(
            "INFO",
            "Endpoint creation requested",
            "endpoint.create",
            started,
            config_name=self.endpoint_config_name,
        )

    def delete(self) -> None:
        """Request endpoint teardown. Raises EndpointNotFoundError if already absent."""
        started = time.perf_counter()
        try:
            self._provider.delete_endpoint(self.endpoint_name)
        except ControllerError as exc:
            self._log_failure(exc, "endpoint.delete", started)
            raise
        record_endpoint_deleted()
        self._log("INFO", "Endpoint deletion requested", "endpoint.delete", started)
