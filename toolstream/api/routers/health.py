"""Health check API router."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from toolstream.infra.metrics import get_metrics_response

router = APIRouter()


@router.get("/health", tags=["Health"])
async def health_check():
    """Combined health check endpoint."""
    return {
        "status": "ok",
        "service": "toolstream",
        "version": "1.0.0",
    }


@router.get("/health/live", tags=["Health"])
async def liveness_probe():
    """Liveness probe - indicates if the process is running."""
    return {"status": "alive"}


@router.get("/health/ready", tags=["Health"])
async def readiness_probe(request: Request):
    """Readiness probe - checks the AI gateway key and model are configured."""
    gateway = request.app.state.gateway
    if gateway.settings.is_configured:
        return {"status": "ready", "tools": len(gateway.registry)}
    return JSONResponse(status_code=503, content={"status": "not_ready", "reason": "AI gateway not configured"})


@router.get("/metrics", tags=["Health"])
async def metrics():
    """Prometheus metrics endpoint."""
    return get_metrics_response()
