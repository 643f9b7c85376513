"""Models package - re-exports for convenience."""

from packpal.engine.models.api import (
    ChatRequest,
    ChatResponse,
    PackingListRequest,
    PackingListResponse,
)
from packpal.engine.models.packing import PackingCategory, PackingItem
from packpal.engine.models.trip import (
    Trip,
    TripActivity,
    TripOccasion,
    TripType,
    WeatherCondition,
)
from packpal.engine.models.weather import (
    ForecastResponse,
    Geo,
    GeoResult,
    TemperatureUnit,
    WeatherSummary,
)

__all__ = [
    # Trip
    "Trip",
    "TripActivity",
    "TripOccasion",
    "TripType",
    "WeatherCondition",
    # Packing
    "PackingCategory",
    "PackingItem",
    # Weather
    "WeatherSummary",
    "TemperatureUnit",
    "Geo",
    "GeoResult",
    "ForecastResponse",
    # API
    "PackingListRequest",
    "PackingListResponse",
    "ChatRequest",
    "ChatResponse",
]
