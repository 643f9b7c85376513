"""Packing list and chat endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from packpal.engine.models.api import (
    ChatRequest,
    ChatResponse,
    PackingListRequest,
    PackingListResponse,
)
from packpal.engine.orchestration.orchestrator import GenerationOrchestrator, get_orchestrator

router = APIRouter(prefix="/packing", tags=["packing"])
logger = logging.getLogger(__name__)

Orchestrator = Annotated[GenerationOrchestrator, Depends(get_orchestrator)]


@router.post("/list", response_model=PackingListResponse)
async def create_packing_list(
    request: PackingListRequest, orchestrator: Orchestrator
) -> PackingListResponse:
    """Generate a categorized packing list.

    The local strategy is rule-based (with the embedding hook); the remote
    strategy asks the text generator and falls back to rules on any failure.
    """
    trip = request.trip
    for problem in trip.validation_errors():
        logger.info(f"Trip accepted with validation issue: {problem}")

    if request.strategy == "remote":
        categories = await orchestrator.generate_packing_list_remote(trip, request.weather)
    else:
        categories = await orchestrator.generate_packing_list(trip, request.weather)

    return PackingListResponse(strategy=request.strategy, categories=categories)


@router.post("/chat", response_model=ChatResponse)
async def chat(request: ChatRequest, orchestrator: Orchestrator) -> ChatResponse:
    """Answer a packing question (always a non-empty reply)."""
    reply = await orchestrator.generate_chat_response(request.prompt)
    return ChatResponse(reply=reply)
