"""Health check endpoints.

Every engine component has a deterministic fallback, so /healthz always
answers 200; a component running on its fallback reports "degraded".
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends

from packpal.engine.orchestration.orchestrator import GenerationOrchestrator, get_orchestrator

router = APIRouter()


@router.get("/health")
async def health() -> dict[str, str]:
    """Simple health check for Docker/k8s.

    Returns:
        200 OK always (application is running)
    """
    return {"status": "ok"}


@router.get("/healthz")
async def healthz(
    orchestrator: Annotated[GenerationOrchestrator, Depends(get_orchestrator)],
) -> dict[str, Any]:
    """Component status: vocab, embedding model, text generator, weather."""
    components = orchestrator.component_status()
    degraded = any(value != "ok" for value in components.values())
    return {
        "status": "degraded" if degraded else "ok",
        "components": components,
    }
