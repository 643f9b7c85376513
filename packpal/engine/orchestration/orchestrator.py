"""Generation orchestrator - the engine's callable entry points.

Two packing list strategies are exposed, each independently fallback-safe:

- local: embed a trip description (an extension point; the vector does not
  change the output) then return the rule-based list
- remote: ask the text generator; any failure kind maps to the rule-based list

No entry point raises. The worst outcome is the deterministic rule-based list,
a canned chat reply, or the month-based weather estimate.
"""

import asyncio
import logging
from collections.abc import Callable
from datetime import date
from functools import lru_cache

import numpy as np

from packpal.engine.config import Settings, get_settings
from packpal.engine.errors import CancelToken, FailureKind, TierResult
from packpal.engine.llm.client import (
    CHAT_EMPTY_REPLY,
    DeterministicStubClient,
    TextGenerator,
    get_text_generator,
)
from packpal.engine.models.packing import PackingCategory
from packpal.engine.models.trip import Trip
from packpal.engine.models.weather import TemperatureUnit, WeatherSummary
from packpal.engine.nlp.embedding import EmbeddingClient, EmbeddingModel
from packpal.engine.nlp.tokenizer import WordTokenizer
from packpal.engine.rules.categorizer import categorize_trip
from packpal.engine.utils.metrics import CallMetrics, PrometheusCallMetrics
from packpal.engine.weather.cache import UnconfiguredLookup, WeatherCache, WeatherProvider
from packpal.engine.weather.client import OpenWeatherClient

logger = logging.getLogger(__name__)

EmbeddingHook = Callable[[Trip, np.ndarray], None]

# Used in descriptions when a summary carries no current temperature
DEFAULT_DESCRIPTION_TEMP = 20


def build_trip_description(trip: Trip, weather: WeatherSummary | None = None) -> str:
    """One-paragraph trip summary used as embedding input."""
    activities = ", ".join(a.value for a in trip.activities) or "general"
    if weather is not None:
        temp = weather.current_temp if weather.current_temp is not None else DEFAULT_DESCRIPTION_TEMP
        weather_text = f"{weather.description}, {int(temp)}°{weather.unit.symbol}"
    else:
        weather_text = trip.expected_weather.value
    return (
        f"Trip to {trip.destination} for {trip.duration_days} days. "
        f"Occasion: {trip.occasion.value}. Activities: {activities}. "
        f"Weather: {weather_text}."
    )


class GenerationOrchestrator:
    """Entry points consumed by UI and API collaborators."""

    def __init__(
        self,
        *,
        embedder: EmbeddingModel,
        text_generator: TextGenerator,
        weather_provider: WeatherProvider,
        categorize: Callable[[Trip], list[PackingCategory]] = categorize_trip,
        embedding_hook: EmbeddingHook | None = None,
        metrics: CallMetrics | None = None,
    ) -> None:
        """Initialize orchestrator with explicitly constructed services.

        Args:
            embedder: Embedding model for the local strategy
            text_generator: Remote (or stub) text generator
            weather_provider: Cached weather provider
            categorize: Terminal rule-based generator
            embedding_hook: Optional consumer of the local-strategy embedding
            metrics: Metrics recorder (optional, defaults to no-op)
        """
        self.embedder = embedder
        self.text_generator = text_generator
        self.weather_provider = weather_provider
        self._categorize = categorize
        self._embedding_hook = embedding_hook
        self._metrics = metrics or CallMetrics()

    def _fallback(
        self, strategy: str, trip: Trip, failure: FailureKind | None, detail: str | None
    ) -> list[PackingCategory]:
        reason = failure.value if failure else "unknown"
        logger.warning(f"{strategy} strategy falling back to rules ({reason}: {detail})")
        self._metrics.inc_fallback(strategy, reason)
        return self._categorize(trip)

    async def generate_packing_list(
        self, trip: Trip, weather: WeatherSummary | None = None
    ) -> list[PackingCategory]:
        """Local strategy: embed the trip description, then rule-based categories."""
        description = build_trip_description(trip, weather)
        try:
            vector = await asyncio.to_thread(self.embedder.get_embedding, description)
            if self._embedding_hook is not None:
                self._embedding_hook(trip, vector)
        except Exception as e:
            # Output never depends on the vector
            logger.error(f"Local embedding step raised: {type(e).__name__}: {e}")
            self._metrics.inc_fallback("local", FailureKind.MODEL_UNAVAILABLE.value)

        categories = self._categorize(trip)
        logger.info(f"Generated categories (local): {len(categories)}")
        return categories

    async def generate_packing_list_remote(
        self,
        trip: Trip,
        weather: WeatherSummary | None = None,
        *,
        cancel_token: CancelToken | None = None,
    ) -> list[PackingCategory]:
        """Remote strategy: text generator, each failure kind mapped to rules."""
        try:
            result = await self.text_generator.request_packing_list(
                trip, weather, cancel_token=cancel_token
            )
        except Exception as e:
            logger.error(f"Text generator raised: {type(e).__name__}: {e}")
            result = TierResult.fail(FailureKind.TRANSPORT, type(e).__name__)

        if result.ok and result.value:
            return result.value
        if result.ok:
            result = TierResult.fail(FailureKind.EMPTY_RESULT, "no categories")
        return self._fallback("remote", trip, result.failure, result.detail)

    async def generate_chat_response(
        self, prompt: str, *, cancel_token: CancelToken | None = None
    ) -> str:
        """Answer a packing question; never empty, never raises."""
        try:
            reply = await self.text_generator.generate_chat_response(
                prompt, cancel_token=cancel_token
            )
        except Exception as e:
            logger.error(f"Chat generation raised: {type(e).__name__}: {e}")
            self._metrics.inc_fallback("chat", FailureKind.TRANSPORT.value)
            return CHAT_EMPTY_REPLY
        return reply.strip() or CHAT_EMPTY_REPLY

    async def fetch_weather_summary(
        self,
        destination: str,
        start: date,
        end: date,
        unit: TemperatureUnit | None = None,
    ) -> WeatherSummary:
        """Cached weather summary for a destination (month-based fallback on failure)."""
        return await self.weather_provider.fetch_summary(destination, start, end, unit)

    def component_status(self) -> dict[str, str]:
        """Availability of each degradable component ("ok" or "degraded")."""
        tokenizer = getattr(self.embedder, "tokenizer", None)
        return {
            "vocab": "degraded" if getattr(tokenizer, "degraded", True) else "ok",
            "embedding_model": "ok" if getattr(self.embedder, "available", False) else "degraded",
            "text_generator": (
                "degraded" if isinstance(self.text_generator, DeterministicStubClient) else "ok"
            ),
            "weather": "ok" if getattr(self.weather_provider, "configured", True) else "degraded",
        }


def build_orchestrator(
    settings: Settings | None = None, *, embedding_hook: EmbeddingHook | None = None
) -> GenerationOrchestrator:
    """Wire production services from settings."""
    settings = settings or get_settings()
    metrics = PrometheusCallMetrics()

    embedder = EmbeddingClient(
        WordTokenizer.from_file(settings.vocab_path),
        settings.embedding_model_path,
        max_length=settings.embedding_max_length,
        dim=settings.embedding_dim,
    )
    text_generator = get_text_generator(settings, metrics=metrics)

    api_key = settings.openweather_api_key
    if api_key and api_key.get_secret_value():
        lookup = OpenWeatherClient(
            api_key.get_secret_value(),
            geocoding_url=settings.geocoding_url,
            forecast_url=settings.forecast_url,
            timeout_s=settings.weather_timeout_s,
            metrics=metrics,
        )
    else:
        logger.warning("No weather API key configured, using seasonal estimates only")
        lookup = UnconfiguredLookup()
    weather_provider = WeatherCache(
        lookup,
        ttl_seconds=settings.weather_ttl_seconds,
        default_unit=TemperatureUnit(settings.temperature_unit),
        single_flight=settings.weather_single_flight,
        metrics=metrics,
    )

    return GenerationOrchestrator(
        embedder=embedder,
        text_generator=text_generator,
        weather_provider=weather_provider,
        embedding_hook=embedding_hook,
        metrics=metrics,
    )


@lru_cache
def get_orchestrator() -> GenerationOrchestrator:
    """Process-wide orchestrator (FastAPI dependency)."""
    return build_orchestrator()
