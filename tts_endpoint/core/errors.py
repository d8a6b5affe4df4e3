"""Custom exceptions for the endpoint controller."""

from typing import Any, Optional


class ControllerError(Exception):
    """Base exception for controller errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class ProviderUnavailableError(ControllerError):
    """Raised on transport, auth, throttling or unclassified provider failures."""

    def __init__(
        self,
        message: str,
        status_code: int = 502,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message,
            status_code=status_code,
            error_code="ProviderUnavailable",
            details=details,
        )


class EndpointNotFoundError(ControllerError):
    """Raised when the configured endpoint does not exist."""

    def __init__(self, endpoint_name: str, message: Optional[str] = None) -> None:
        super().__init__(
            message or f"Endpoint not found: {endpoint_name}",
            status_code=404,
            error_code="NotFound",
            details={"endpoint_name": endpoint_name},
        )


class EndpointAlreadyExistsError(ControllerError):
    """Raised when create is requested for an endpoint that already exists."""

    def __init__(self, endpoint_name: str, message: Optional[str] = None) -> None:
        super().__init__(
            message or f"Endpoint already exists: {endpoint_name}",
            status_code=409,
            error_code="AlreadyExists",
            details={"endpoint_name": endpoint_name},
        )


class EndpointNotReadyError(ControllerError):
    """Raised when an invocation hits an endpoint that is absent or not serving."""

    def __init__(self, endpoint_name: str, message: Optional[str] = None) -> None:
        super().__init__(
            message or f"Endpoint is not serving: {endpoint_name}",
            status_code=503,
            error_code="EndpointNotReady",
            details={"endpoint_name": endpoint_name},
        )


class MalformedEvidenceError(ControllerError):
    """Raised when a log query returns a shape the idle monitor cannot interpret."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(
            message,
            status_code=502,
            error_code="MalformedEvidence",
            details=details,
        )


class UnauthorizedError(ControllerError):
    """Raised when an internal route is called without the shared secret."""

    def __init__(self, message: str = "Invalid internal secret") -> None:
        super().__init__(message, status_code=403, error_code="Unauthorized")
