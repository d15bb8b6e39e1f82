"""Health check routes."""

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "healthy"}


@router.get("/ready")
async def readiness_check(request: Request) -> dict[str, str]:
    """Readiness probe; reports whether a model credential is configured."""
    server = request.app.state.server
    if server.config.resolve_api_key() is None and not server.has_provider:
        return {"status": "unconfigured"}
    return {"status": "ready"}
