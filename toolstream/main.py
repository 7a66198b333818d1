"""FastAPI application for the AI tool gateway."""

import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from toolstream.api.responses import error_response
from toolstream.api.routers import health, tools
from toolstream.infra.config import config
from toolstream.infra.error_handler import ClassifiedError, ErrorCategory
from toolstream.infra.logging import app_logger
from toolstream.infra.middleware import RequestIDMiddleware, RequestLoggingMiddleware, setup_cors
from toolstream.services.streaming_gateway import GatewaySettings, ProviderFactory, StreamingGateway
from toolstream.services.tool_registry import ToolRegistry, default_registry


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    settings = app.state.gateway.settings
    app_logger.info(
        "Application starting up",
        extra={
            "tools": len(app.state.gateway.registry),
            "model_id": settings.model_id,
            "gateway_configured": settings.is_configured,
        },
    )
    if not settings.is_configured:
        app_logger.warning("AI gateway API key or model id missing; tool runs will fail with 500")

    yield

    app_logger.info("Application shutting down")


def _request_id(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None)


def create_app(
    settings: Optional[GatewaySettings] = None,
    registry: Optional[ToolRegistry] = None,
    provider_factory: Optional[ProviderFactory] = None,
) -> FastAPI:
    """
    Build the application.

    Settings are resolved here, once, and handed to the gateway explicitly.
    """
    app = FastAPI(
        title="Toolstream API",
        description="""
    Streams AI content-generation tools (titles, social posts, scripts, thumbnails,
    rewrites) from an AI gateway straight to the browser.

    ## Responses

    - **Success**: `text/plain` body with the generated text, streamed as it arrives.
    - **Failure before streaming starts**: JSON `{"error": ..., "userMessage": ...}`.
    - Every response carries `x-tss-raw-response: true`.
    """,
        version="1.0.0",
        lifespan=lifespan,
        tags_metadata=[
            {"name": "Tools", "description": "List AI tools and run them"},
            {"name": "Health", "description": "Health check and monitoring endpoints"},
        ],
    )

    app.state.gateway = StreamingGateway(
        registry=registry or default_registry,
        settings=settings or GatewaySettings.from_config(config),
        provider_factory=provider_factory,
    )

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    setup_cors(app)

    app.include_router(tools.router)
    app.include_router(health.router)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Malformed request bodies share the tool error shape."""
        app_logger.warning("Request validation failed", extra={"errors": str(exc.errors())})
        classified = ClassifiedError.for_category(ErrorCategory.INVALID_REQUEST, f"Invalid request: {exc.errors()}")
        return error_response(classified, _request_id(request))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions."""
        category = ErrorCategory.NOT_FOUND if exc.status_code == 404 else ErrorCategory.INVALID_REQUEST
        classified = ClassifiedError.for_category(category, str(exc.detail))
        classified.status_code = exc.status_code
        return error_response(classified, _request_id(request))

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle all other exceptions."""
        error_id = str(uuid.uuid4())
        app_logger.error(f"Unhandled exception: {exc}", exc_info=True, extra={"error_id": error_id})
        classified = ClassifiedError.for_category(
            ErrorCategory.INTERNAL,
            f"Internal server error. Error ID: {error_id}",
        )
        return error_response(classified, _request_id(request))

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=8000,
        timeout_keep_alive=30,
        timeout_graceful_shutdown=30,
    )
