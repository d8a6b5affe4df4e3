"""SageMaker and SageMaker Runtime client for endpoint CRUD and invocation."""

from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from tts_endpoint.core.errors import (
    EndpointAlreadyExistsError,
    EndpointNotFoundError,
    EndpointNotReadyError,
    ProviderUnavailableError,
)
from tts_endpoint.core.telemetry import record_provider_api_error, span
from tts_endpoint.models.entities import InvocationResult, LaunchConfig
from tts_endpoint.services.aws_errors import (
    error_message,
    is_endpoint_not_serving,
    is_existing_resource,
    is_missing_endpoint,
    provider_unavailable,
)
from tts_endpoint.services.base_provider import BaseEndpointProvider


class SageMakerProvider(BaseEndpointProvider):
    """Endpoint provider backed by boto3 ``sagemaker`` and ``sagemaker-runtime`` clients.

    Clients are built once per process and never mutated; every call is a
    single synchronous round trip. Provider errors are classified, never
    passed through raw.
    """

    def __init__(self, sagemaker_client: Any, runtime_client: Any) -> None:
        self._sagemaker = sagemaker_client
        self._runtime = runtime_client

    def create_endpoint(self, name: str, config_name: str) -> None:
        with span("sagemaker.create_endpoint", {"endpoint_name": name, "config_name": config_name}):
            try:
                self._sagemaker.create_endpoint(EndpointName=name, EndpointConfigName=config_name)
            except ClientError as exc:
                if is_existing_resource(exc):
                    raise EndpointAlreadyExistsError(name, error_message(exc)) from exc
                raise provider_unavailable(exc, "create_endpoint") from exc
            except BotoCoreError as exc:
                raise provider_unavailable(exc, "create_endpoint") from exc

    def delete_endpoint(self, name: str) -> None:
        with span("sagemaker.delete_endpoint", {"endpoint_name": name}):
            try:
                self._sagemaker.delete_endpoint(EndpointName=name)
            except ClientError as exc:
                if is_missing_endpoint(exc):
                    raise EndpointNotFoundError(name, error_message(exc)) from exc
                raise provider_unavailable(exc, "delete_endpoint") from exc
            except BotoCoreError as exc:
                raise provider_unavailable(exc, "delete_endpoint") from exc

    def describe_endpoint(self, name: str) -> str:
        with span("sagemaker.describe_endpoint", {"endpoint_name": name}):
            try:
                resp = self._sagemaker.describe_endpoint(EndpointName=name)
            except ClientError as exc:
                if is_missing_endpoint(exc):
                    raise EndpointNotFoundError(name, error_message(exc)) from exc
                raise provider_unavailable(exc, "describe_endpoint") from exc
            except BotoCoreError as exc:
                raise provider_unavailable(exc, "describe_endpoint") from exc
        status = resp.get("EndpointStatus")
        if not status:
            record_provider_api_error()
            raise ProviderUnavailableError(
                message="describe_endpoint returned no status",
                details={"operation": "describe_endpoint"},
            )
        return status

    def invoke_endpoint(
        self,
        name: str,
        body: bytes,
        content_type: str,
        accept: str,
    ) -> InvocationResult:
        with span("sagemaker.invoke_endpoint", {"endpoint_name": name, "accept": accept}):
            try:
                resp = self._runtime.invoke_endpoint(
                    EndpointName=name,
                    Body=body,
                    ContentType=content_type,
                    Accept=accept,
                )
                payload = resp["Body"].read()
            except ClientError as exc:
                if is_endpoint_not_serving(exc):
                    raise EndpointNotReadyError(name, error_message(exc)) from exc
                raise provider_unavailable(exc, "invoke_endpoint") from exc
            except BotoCoreError as exc:
                raise provider_unavailable(exc, "invoke_endpoint") from exc
        return InvocationResult(body=payload, content_type=resp.get("ContentType") or accept)

    def create_launch_config(self, config: LaunchConfig) -> dict[str, Any]:
        """
        Create the SageMaker model and endpoint configuration described by ``config``.
        Existing resources are reported, not overwritten.
        """
        result: dict[str, Any] = {"created": [], "existing": []}
        with span("sagemaker.create_launch_config", {"config_name": config.config_name}):
            for kind, call, request in (
                ("model", self._sagemaker.create_model, config.to_model_request()),
                ("endpoint_config", self._sagemaker.create_endpoint_config, config.to_endpoint_config_request()),
            ):
                try:
                    resp = call(**request)
                except ClientError as exc:
                    if is_existing_resource(exc):
                        result["existing"].append(kind)
                        continue
                    raise provider_unavailable(exc, f"create_{kind}") from exc
                except BotoCoreError as exc:
                    raise provider_unavailable(exc, f"create_{kind}") from exc
                result["created"].append(kind)
                arn_key = "ModelArn" if kind == "model" else "EndpointConfigArn"
                result[f"{kind}_arn"] = resp.get(arn_key)
        return result
