"""Synthesis proxy: forward query parameters to the running endpoint, return audio."""

import json
import time
from typing import Mapping

from tts_endpoint.core.errors import ControllerError
from tts_endpoint.core.logging import structured_log
from tts_endpoint.core.telemetry import record_invocation
from tts_endpoint.models.entities import InvocationResult
from tts_endpoint.services.base_provider import BaseEndpointProvider


def serialize_params(params: Mapping[str, str]) -> bytes:
    """Invocation payload: the parameters verbatim as a JSON object."""
    return json.dumps(dict(params)).encode("utf-8")


class InvocationProxy:
    """
    Invoke the configured endpoint without checking its status first;
    the provider's own error decides whether it is serving.
    """

    def __init__(
        self,
        provider: BaseEndpointProvider,
        endpoint_name: str,
        content_type: str = "application/json",
        accept: str = "audio/wav",
    ) -> None:
        self._provider = provider
        self.endpoint_name = endpoint_name
        self.content_type = content_type
        self.accept = accept

    def invoke(self, params: Mapping[str, str]) -> InvocationResult:
        started = time.perf_counter()
        try:
            result = self._provider.invoke_endpoint(
                self.endpoint_name,
                serialize_params(params),
                self.content_type,
                self.accept,
            )
        except ControllerError as exc:
            structured_log(
                "WARNING",
                f"Invocation failed: {exc.message}",
                endpoint_name=self.endpoint_name,
                operation="endpoint.invoke",
                duration_ms=(time.perf_counter() - started) * 1000,
                metadata={"error_code": exc.error_code},
            )
            raise
        elapsed = time.perf_counter() - started
        record_invocation(elapsed)
        structured_log(
            "INFO",
            "Invocation completed",
            endpoint_name=self.endpoint_name,
            operation="endpoint.invoke",
            duration_ms=elapsed * 1000,
            metadata={"bytes": len(result.body), "content_type": result.content_type},
        )
        return result
