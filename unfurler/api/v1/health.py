from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from unfurler.config import settings
from unfurler.core.metrics import get_metrics, get_metrics_content_type

router = APIRouter()


@router.get(
    "/health",
    summary="Liveness check",
    description="Returns 200 with the service version while the process is up. Upstream sites are never contacted.",
)
async def health():
    return {"status": "healthy", "version": settings.APP_VERSION}


@router.get(
    "/metrics",
    summary="Prometheus metrics",
    description="Unfurl outcome counters and latency histogram in Prometheus text format; 404 when METRICS_ENABLED is off.",
)
async def metrics():
    if not settings.METRICS_ENABLED:
        return PlainTextResponse("Metrics disabled", status_code=404)
    return PlainTextResponse(get_metrics(), media_type=get_metrics_content_type())
