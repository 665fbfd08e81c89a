from __future__ import annotations

import time
import uuid
from datetime import datetime, timezone

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config import Settings, settings as default_settings
from core.logging import configure_logging
from domain.errors import DomainError, InvalidInputError, UpstreamFailureError
from domain.use_cases.analyze_image import AnalysisPipeline, PipelineConfig
from services.vision.openai_vision import VisionClientState, init_vision_client
from .schemas import (
    AnalyzeImageInput,
    AnalyzeImageResponse,
    ErrorResponse,
    VisionStatusResponse,
)


API_VERSION = "3.0.0"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def create_app(settings: Settings | None = None, vision: VisionClientState | None = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.log_level, verbose=settings.verbose)
    log = structlog.get_logger("api")

    if vision is None:
        vision = init_vision_client(settings.openai_api_key, model=settings.openai_vision_model)
    pipeline = AnalysisPipeline(
        vision,
        PipelineConfig(verbose=settings.verbose, environment=settings.environment_label),
    )

    app = FastAPI(title="Inventory Vision API", version=API_VERSION)
    app.state.pipeline = pipeline
    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def trace_requests(request: Request, call_next):
        trace_id = request.headers.get("X-Trace-Id") or uuid.uuid4().hex[:12]
        structlog.contextvars.bind_contextvars(trace_id=trace_id)
        started = time.perf_counter()
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("trace_id")
        path = request.url.path
        if path.startswith("/api/") or path == "/health":
            log.bind(trace_id=trace_id).info(
                "http_request",
                method=request.method,
                path=path,
                status=response.status_code,
                took_ms=round((time.perf_counter() - started) * 1000.0, 1),
            )
        response.headers["X-Trace-Id"] = trace_id
        return response

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
        message = None
        if getattr(exc, "public_detail", False) or settings.verbose:
            message = exc.detail
        elif isinstance(exc, UpstreamFailureError):
            message = "Internal server error"
        body = ErrorResponse(error=exc.message, code=exc.code, message=message)
        return JSONResponse(status_code=exc.status_code, content=body.model_dump(by_alias=True, exclude_none=True))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        err = InvalidInputError()
        message = None
        if settings.verbose:
            message = "; ".join(
                f"{'.'.join(str(p) for p in e.get('loc', ()))}: {e.get('msg', '')}" for e in exc.errors()
            )
        log.warning("analyze_rejected", reason=err.code, path=request.url.path)
        body = ErrorResponse(error=err.message, code=err.code, message=message)
        return JSONResponse(status_code=err.status_code, content=body.model_dump(by_alias=True, exclude_none=True))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        log.exception("server_error", path=request.url.path, error=str(exc))
        message = str(exc) if settings.verbose else "Something went wrong"
        body = ErrorResponse(error="Internal server error", code="E_INTERNAL", message=message)
        return JSONResponse(status_code=500, content=body.model_dump(by_alias=True, exclude_none=True))

    @app.exception_handler(404)
    async def not_found_handler(request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content={
                "error": "Route not found",
                "method": request.method,
                "path": request.url.path,
                "timestamp": _now(),
            },
        )

    @app.get("/health")
    def health() -> dict:
        return {
            "status": "OK",
            "timestamp": _now(),
            "environment": {
                "mode": "AWS Lambda" if settings.is_hosted else "Local Development",
                "appEnv": settings.app_env,
                "openai": vision.credential_present,
            },
            "services": {
                "aiVision": vision.ready,
                "visionModel": settings.openai_vision_model,
            },
        }

    @app.get("/api/ai-vision-status", response_model=VisionStatusResponse)
    def ai_vision_status() -> VisionStatusResponse:
        messages = {
            "ready": f"AI Vision is ready for use ({settings.environment_label})",
            "missing_api_key": (
                "OpenAI API key not configured. Add OPENAI_API_KEY to your environment variables."
            ),
            "client_error": "OpenAI API key is set but the client failed to initialize.",
        }
        return VisionStatusResponse(
            ai_vision_enabled=vision.credential_present,
            openai_client_ready=vision.ready,
            status=vision.status,
            message=messages[vision.status],
            timestamp=_now(),
            vision_model=settings.openai_vision_model,
            environment=settings.environment_label,
        )

    @app.get("/api/test")
    def api_test() -> dict:
        return {
            "message": "Inventory Vision API is running",
            "timestamp": _now(),
            "environment": settings.environment_label,
            "openaiConfigured": vision.credential_present,
            "openaiClientReady": vision.ready,
            "visionModel": settings.openai_vision_model,
            "systemStatus": "operational",
            "version": API_VERSION,
        }

    if settings.verbose:

        @app.get("/debug/routes")
        def debug_routes() -> dict:
            routes = [
                {"path": r.path, "methods": sorted(getattr(r, "methods", None) or [])}
                for r in app.routes
            ]
            return {"routes": routes, "count": len(routes)}

    @app.post(
        "/api/analyze-image",
        response_model=AnalyzeImageResponse,
        responses={
            400: {"model": ErrorResponse},
            401: {"model": ErrorResponse},
            402: {"model": ErrorResponse},
            429: {"model": ErrorResponse},
            500: {"model": ErrorResponse},
        },
    )
    async def analyze_image(payload: AnalyzeImageInput) -> AnalyzeImageResponse:
        result = await pipeline.analyze(payload.image, payload.prompt, payload.file_name)
        return AnalyzeImageResponse.from_result(result)

    return app


app = create_app()
