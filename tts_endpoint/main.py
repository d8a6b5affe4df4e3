"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tts_endpoint.api.routes import endpoint_router, health_router, internal_router
from tts_endpoint.core.config import get_settings
from tts_endpoint.core.errors import ControllerError, UnauthorizedError
from tts_endpoint.core.logging import configure_logging, structured_log
from tts_endpoint.core.telemetry import init_telemetry, instrument_fastapi


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: configure logging and telemetry."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)
    init_telemetry(console_export=settings.otel_console_export)
    structured_log(
        "INFO",
        "Controller started",
        endpoint_name=settings.endpoint_name,
        metadata={
            "config_name": settings.endpoint_config_name,
            "log_group": settings.log_group_name,
            "idle_window_minutes": settings.idle_window_minutes,
        },
    )
    yield


app = FastAPI(
    title="TTS Endpoint Controller",
    description="On-demand SageMaker TTS endpoint: create, describe, delete, invoke, evict when idle",
    version="1.0.0",
    lifespan=lifespan,
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
    redirect_slashes=False,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["*"],
)

app.include_router(endpoint_router)
app.include_router(health_router)
app.include_router(internal_router)

instrument_fastapi(app)


def _error_body(error: str, message: str, details: dict | None = None) -> dict:
    return {"error": error, "message": message, "details": details or {}}


@app.exception_handler(ControllerError)
async def controller_error_handler(request: Request, exc: ControllerError) -> JSONResponse:
    """Map custom exceptions to JSON response; flat 500 unless strict status is on."""
    status_code = exc.status_code
    if not get_settings().strict_error_status and not isinstance(exc, UnauthorizedError):
        status_code = 500
    return JSONResponse(
        status_code=status_code,
        content=_error_body(exc.error_code, exc.message, exc.details),
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unknown path or unsupported method on a known path: both are 404."""
    if exc.status_code in (404, 405):
        return JSONResponse(
            status_code=404,
            content=_error_body("RouteNotFound", f"No route for {request.method} {request.url.path}"),
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body("HTTPError", str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    structured_log(
        "ERROR",
        f"Unhandled error on {request.method} {request.url.path}",
        operation="http.request",
        error={"type": type(exc).__name__, "message": str(exc)},
    )
    return JSONResponse(
        status_code=500,
        content=_error_body("InternalError", "Internal server error"),
    )
