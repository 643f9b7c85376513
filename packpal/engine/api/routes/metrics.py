"""Prometheus metrics endpoint."""

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter()


@router.get("/metrics")
async def metrics() -> Response:
    """Prometheus metrics endpoint.

    Exposes upstream_latency_ms{service, outcome},
    upstream_errors_total{service, reason}, weather_cache_hits_total and
    generation_fallbacks_total{strategy, reason}.
    """
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
