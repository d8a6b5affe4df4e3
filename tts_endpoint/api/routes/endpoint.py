"""Endpoint control and synthesis: GET/POST/DELETE /, GET /voice."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from tts_endpoint.api.dependencies import get_controller, get_invocation_proxy
from tts_endpoint.models.schemas import EndpointStatusResponse, ErrorResponse
from tts_endpoint.services.endpoint_controller import EndpointController
from tts_endpoint.services.invocation import InvocationProxy

router = APIRouter(tags=["endpoint"], responses={500: {"model": ErrorResponse}})


@router.get("/", response_model=EndpointStatusResponse)
def describe_endpoint(
    controller: Annotated[EndpointController, Depends(get_controller)],
) -> EndpointStatusResponse:
    """Current endpoint status, as reported by the provider."""
    return EndpointStatusResponse(status=controller.describe())


@router.post("/", response_class=Response)
def create_endpoint(
    controller: Annotated[EndpointController, Depends(get_controller)],
) -> Response:
    """Request endpoint creation; poll GET / until InService."""
    controller.create()
    return Response(status_code=200)


@router.delete("/", response_class=Response)
def delete_endpoint(
    controller: Annotated[EndpointController, Depends(get_controller)],
) -> Response:
    controller.delete()
    return Response(status_code=200)


@router.get("/voice", response_class=Response)
def synthesize(
    request: Request,
    proxy: Annotated[InvocationProxy, Depends(get_invocation_proxy)],
) -> Response:
    """Synthesize speech from the query parameters; repeated keys are comma-joined."""
    query = request.query_params
    params = {key: ",".join(query.getlist(key)) for key in query.keys()}
    result = proxy.invoke(params)
    return Response(content=result.body, media_type=result.content_type)
