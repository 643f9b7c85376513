"""Weather summary endpoint."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from packpal.engine.models.weather import TemperatureUnit, WeatherSummary
from packpal.engine.orchestration.orchestrator import GenerationOrchestrator, get_orchestrator

router = APIRouter(prefix="/weather", tags=["weather"])


@router.get("/summary", response_model=WeatherSummary)
async def weather_summary(
    orchestrator: Annotated[GenerationOrchestrator, Depends(get_orchestrator)],
    destination: Annotated[str, Query(min_length=1)],
    start: date,
    end: date,
    unit: TemperatureUnit | None = None,
) -> WeatherSummary:
    """Cached weather for a destination; seasonal estimate when the lookup fails."""
    if end < start:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="end must not be before start",
        )
    return await orchestrator.fetch_weather_summary(destination, start, end, unit)
