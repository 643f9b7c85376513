"""Weather adapter using OpenWeather geocoding + One Call forecast."""

import logging
import string
import time
from datetime import date
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from packpal.engine.errors import (
    DecodeError,
    EmptyResultError,
    EngineError,
    TierResult,
    TransportError,
)
from packpal.engine.models.weather import (
    ForecastResponse,
    Geo,
    GeoResult,
    TemperatureUnit,
    WeatherSummary,
)
from packpal.engine.utils.logging import StructuredCallLogger
from packpal.engine.utils.metrics import CallMetrics

logger = logging.getLogger(__name__)

GEOCODE_SERVICE = "weather.geocode"
FORECAST_SERVICE = "weather.forecast"

FORECAST_DAYS = 3

WEATHER_ICONS: dict[str, str] = {
    "clear": "sun.max.fill",
    "clouds": "cloud.fill",
    "rain": "cloud.rain.fill",
    "drizzle": "cloud.rain.fill",
    "thunderstorm": "cloud.bolt.rain.fill",
    "snow": "cloud.snow.fill",
    "mist": "cloud.fog.fill",
    "fog": "cloud.fog.fill",
    "haze": "cloud.fog.fill",
}
DEFAULT_ICON = "cloud.sun.fill"

_geo_results = TypeAdapter(list[GeoResult])


def map_weather_icon(weather_main: str) -> str:
    """Map an OpenWeather condition group to an icon identifier."""
    return WEATHER_ICONS.get(weather_main.lower(), DEFAULT_ICON)


def fallback_weather(on: date) -> WeatherSummary:
    """Coarse seasonal estimate from the calendar month alone."""
    month = on.month
    if 6 <= month <= 9:
        return WeatherSummary(icon="sun.max.fill", description="Warm (75–90°F)")
    if 3 <= month <= 5 or 10 <= month <= 11:
        return WeatherSummary(icon="cloud.sun.fill", description="Moderate (60–70°F)")
    if month in (12, 1, 2):
        return WeatherSummary(icon="cloud.snow.fill", description="Cool (40–55°F)")
    return WeatherSummary(icon="cloud.fill", description="Variable")


def summarize_forecast(forecast: ForecastResponse, unit: TemperatureUnit) -> WeatherSummary:
    """Current conditions plus min/max across the first forecast days."""
    condition = forecast.current.weather[0] if forecast.current.weather else None
    description = string.capwords(condition.description) if condition else "Unknown"
    upcoming = forecast.daily[:FORECAST_DAYS]

    return WeatherSummary(
        icon=map_weather_icon(condition.main if condition else ""),
        description=description,
        current_temp=forecast.current.temp,
        min_temp=min((d.temp.min for d in upcoming), default=None),
        max_temp=max((d.temp.max for d in upcoming), default=None),
        unit=unit,
    )


class OpenWeatherClient:
    """Two-stage lookup: destination -> coordinates -> forecast summary."""

    def __init__(
        self,
        api_key: str,
        *,
        geocoding_url: str = "https://api.openweathermap.org/geo/1.0/direct",
        forecast_url: str = "https://api.openweathermap.org/data/3.0/onecall",
        timeout_s: float = 10.0,
        client: httpx.AsyncClient | None = None,
        metrics: CallMetrics | None = None,
        call_logger: StructuredCallLogger | None = None,
    ) -> None:
        """Initialize client.

        Args:
            api_key: OpenWeather API key
            geocoding_url: Direct geocoding endpoint
            forecast_url: One Call forecast endpoint
            timeout_s: Per-request timeout for both stages
            client: Optional httpx client (for testing with mocks)
            metrics: Metrics recorder (optional, defaults to no-op)
            call_logger: Structured logger (optional)
        """
        self._api_key = api_key
        self.geocoding_url = geocoding_url
        self.forecast_url = forecast_url
        self._timeout_s = timeout_s
        self._client = client
        self._metrics = metrics or CallMetrics()
        self._call_logger = call_logger or StructuredCallLogger()

    async def _get_json(self, service: str, url: str, params: dict[str, Any]) -> Any:
        close_client = False
        client = self._client
        if client is None:
            client = httpx.AsyncClient(timeout=self._timeout_s)
            close_client = True

        start = time.monotonic()
        try:
            response = await client.get(url, params=params, timeout=self._timeout_s)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            self._record(service, start, error_reason=type(e).__name__)
            raise TransportError(f"{service}: {type(e).__name__}: {e}") from e
        except ValueError as e:
            self._record(service, start, error_reason="invalid_json")
            raise DecodeError(f"{service}: invalid JSON: {e}") from e
        finally:
            if close_client:
                await client.aclose()

        self._record(service, start)
        return data

    def _record(self, service: str, start: float, error_reason: str | None = None) -> None:
        elapsed_ms = (time.monotonic() - start) * 1000
        outcome = "error" if error_reason else "success"
        self._metrics.record_latency(service, outcome, elapsed_ms)
        if error_reason:
            self._metrics.inc_error(service, error_reason)
        self._call_logger.log_call(service, outcome, elapsed_ms, error_reason=error_reason)

    async def geocode(self, destination: str) -> Geo:
        """Resolve a destination name to coordinates (first match only).

        Raises:
            TransportError: Network or HTTP error
            DecodeError: Unexpected response shape
            EmptyResultError: No match for the destination
        """
        data = await self._get_json(
            GEOCODE_SERVICE,
            self.geocoding_url,
            {"q": destination, "limit": 1, "appid": self._api_key},
        )
        try:
            results = _geo_results.validate_python(data)
        except ValidationError as e:
            raise DecodeError(f"Geocoding parse error: {e}") from e
        if not results:
            raise EmptyResultError(f"No geocoding results for {destination}")

        first = results[0]
        logger.info(f"Geocoded {destination} to ({first.lat}, {first.lon})")
        return Geo(lat=first.lat, lon=first.lon)

    async def fetch_forecast(self, location: Geo, unit: TemperatureUnit) -> ForecastResponse:
        """Fetch the multi-day forecast in the caller's unit system.

        Raises:
            TransportError: Network or HTTP error
            DecodeError: Unexpected response shape
        """
        data = await self._get_json(
            FORECAST_SERVICE,
            self.forecast_url,
            {
                "lat": location.lat,
                "lon": location.lon,
                "appid": self._api_key,
                "units": unit.api_units,
            },
        )
        try:
            return ForecastResponse.model_validate(data)
        except ValidationError as e:
            raise DecodeError(f"Forecast parse error: {e}") from e

    async def lookup(self, destination: str, unit: TemperatureUnit) -> TierResult[WeatherSummary]:
        """Geocode then forecast; any failure is reported, never raised."""
        try:
            location = await self.geocode(destination)
            forecast = await self.fetch_forecast(location, unit)
        except EngineError as e:
            logger.warning(f"Weather lookup failed for {destination}: {e}")
            return TierResult.from_error(e)

        summary = summarize_forecast(forecast, unit)
        logger.info(f"Weather fetched: {summary.description}, {summary.current_temp}°{unit.symbol}")
        return TierResult.success(summary)
