"""Request/response envelopes for the HTTP surface."""

from typing import Literal

from pydantic import BaseModel, Field

from packpal.engine.models.packing import PackingCategory
from packpal.engine.models.trip import Trip
from packpal.engine.models.weather import WeatherSummary

Strategy = Literal["local", "remote"]


class PackingListRequest(BaseModel):
    """POST /packing/list body."""

    trip: Trip
    weather: WeatherSummary | None = None
    strategy: Strategy = "local"


class PackingListResponse(BaseModel):
    strategy: Strategy
    categories: list[PackingCategory]


class ChatRequest(BaseModel):
    """POST /packing/chat body."""

    prompt: str = Field(..., min_length=1, max_length=4000)


class ChatResponse(BaseModel):
    reply: str
