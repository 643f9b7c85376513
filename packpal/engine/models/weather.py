"""Weather models - summary value plus OpenWeather response shapes."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class TemperatureUnit(str, Enum):
    """Caller's temperature preference."""

    celsius = "c"
    fahrenheit = "f"

    @property
    def api_units(self) -> str:
        """OpenWeather `units` query value."""
        return "metric" if self is TemperatureUnit.celsius else "imperial"

    @property
    def symbol(self) -> str:
        return "C" if self is TemperatureUnit.celsius else "F"


class WeatherSummary(BaseModel):
    """Immutable weather snapshot for a destination."""

    model_config = ConfigDict(frozen=True)

    icon: str
    description: str
    current_temp: float | None = None
    min_temp: float | None = None
    max_temp: float | None = None
    unit: TemperatureUnit = TemperatureUnit.celsius


class Geo(BaseModel):
    """Geographic coordinates (WGS84)."""

    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)


class GeoResult(BaseModel):
    """Geocoding API result entry."""

    name: str
    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)
    country: str | None = None


class ConditionPayload(BaseModel):
    """Weather condition entry (`weather[]`)."""

    description: str
    icon: str
    main: str


class CurrentPayload(BaseModel):
    temp: float
    weather: list[ConditionPayload] = Field(default_factory=list)


class DailyTempPayload(BaseModel):
    min: float
    max: float


class DailyPayload(BaseModel):
    dt: int
    temp: DailyTempPayload
    weather: list[ConditionPayload] = Field(default_factory=list)


class ForecastResponse(BaseModel):
    """One Call forecast response (fields the engine reads)."""

    current: CurrentPayload
    daily: list[DailyPayload] = Field(default_factory=list)
