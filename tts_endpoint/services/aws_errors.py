"""Classification of botocore failures into the controller's error taxonomy."""

from typing import Any

from botocore.exceptions import ClientError

from tts_endpoint.core.errors import ProviderUnavailableError
from tts_endpoint.core.telemetry import record_provider_api_error


def error_code(exc: ClientError) -> str:
    return str(exc.response.get("Error", {}).get("Code", ""))


def error_message(exc: ClientError) -> str:
    return str(exc.response.get("Error", {}).get("Message", ""))


def is_missing_endpoint(exc: ClientError) -> bool:
    """SageMaker control plane: describe/delete against an absent endpoint."""
    return error_code(exc) == "ValidationException" and "could not find endpoint" in error_message(exc).lower()


def is_existing_resource(exc: ClientError) -> bool:
    """SageMaker control plane: create against a name already in use."""
    return error_code(exc) == "ValidationException" and "already existing" in error_message(exc).lower()


def is_endpoint_not_serving(exc: ClientError) -> bool:
    """SageMaker runtime: invoke against an absent, creating or unhealthy endpoint."""
    if error_code(exc) == "ModelNotReadyException":
        return True
    message = error_message(exc).lower()
    return error_code(exc) == "ValidationError" and (
        "not found" in message or "not in service" in message or "inservice" in message
    )


def provider_unavailable(exc: Exception, operation: str) -> ProviderUnavailableError:
    """Wrap a transport, auth, throttling or unclassified provider failure."""
    record_provider_api_error()
    details: dict[str, Any] = {"operation": operation, "type": type(exc).__name__}
    if isinstance(exc, ClientError):
        details["code"] = error_code(exc)
        details["status"] = exc.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
        message = error_message(exc) or str(exc)
    else:
        message = str(exc)
    return ProviderUnavailableError(message=f"{operation} failed: {message}", details=details)
