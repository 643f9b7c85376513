"""TTL-cached weather summaries with deterministic seasonal fallback.

Entries expire lazily: staleness is checked on read and stale entries are
dropped then; there is no background sweep. Fallback summaries are never
cached, so the next call retries the network.
"""

import asyncio
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, date, datetime, time
from typing import Protocol

from packpal.engine.errors import FailureKind, TierResult
from packpal.engine.models.weather import TemperatureUnit, WeatherSummary
from packpal.engine.utils.metrics import CallMetrics
from packpal.engine.weather.client import fallback_weather

logger = logging.getLogger(__name__)

CacheKey = tuple[str, float, str]


class WeatherLookup(Protocol):
    """Network lookup the cache wraps (OpenWeatherClient in production)."""

    async def lookup(self, destination: str, unit: TemperatureUnit) -> TierResult[WeatherSummary]:
        ...


class WeatherProvider(Protocol):
    """Protocol for weather provider implementations."""

    async def fetch_summary(
        self,
        destination: str,
        start: date,
        end: date,
        unit: TemperatureUnit | None = None,
    ) -> WeatherSummary:
        """Weather summary for a destination; never raises."""
        ...


class UnconfiguredLookup:
    """Lookup used when no weather API key is configured."""

    async def lookup(self, destination: str, unit: TemperatureUnit) -> TierResult[WeatherSummary]:
        return TierResult.fail(FailureKind.MODEL_UNAVAILABLE, "weather API key not configured")


@dataclass
class CacheEntry:
    """Cached summary with insertion time."""

    value: WeatherSummary
    cached_at: datetime
    ttl_seconds: int

    def is_fresh(self, now: datetime) -> bool:
        """Check if cache entry is still valid."""
        return (now - self.cached_at).total_seconds() < self.ttl_seconds


def start_timestamp(start: date) -> float:
    """POSIX timestamp of the trip start (midnight UTC for plain dates)."""
    if isinstance(start, datetime):
        return start.timestamp()
    return datetime.combine(start, time(), tzinfo=UTC).timestamp()


class WeatherCache:
    """Weather provider caching successful lookups for a fixed TTL."""

    def __init__(
        self,
        lookup: WeatherLookup,
        *,
        ttl_seconds: int = 3600,
        default_unit: TemperatureUnit = TemperatureUnit.celsius,
        single_flight: bool = True,
        now_fn: Callable[[], datetime] | None = None,
        metrics: CallMetrics | None = None,
    ) -> None:
        """Initialize cache.

        Args:
            lookup: Two-stage network lookup
            ttl_seconds: Entry lifetime from insertion
            default_unit: Unit used when the caller passes none
            single_flight: Share one in-flight fetch between concurrent identical calls
            now_fn: Injectable clock (default: datetime.now(UTC))
            metrics: Metrics recorder (optional, defaults to no-op)
        """
        self._lookup = lookup
        self._ttl_seconds = ttl_seconds
        self._default_unit = default_unit
        self._single_flight = single_flight
        self._now = now_fn or (lambda: datetime.now(UTC))
        self._metrics = metrics or CallMetrics()
        self._entries: dict[CacheKey, CacheEntry] = {}
        self._lock = threading.Lock()
        self._inflight: dict[CacheKey, asyncio.Task[WeatherSummary]] = {}

    @property
    def configured(self) -> bool:
        """Whether a real network lookup backs the cache."""
        return not isinstance(self._lookup, UnconfiguredLookup)

    def make_key(self, destination: str, start: date, unit: TemperatureUnit) -> CacheKey:
        return (destination, start_timestamp(start), unit.value)

    def get(self, key: CacheKey) -> WeatherSummary | None:
        """Fresh cached value, or None (stale entries are removed)."""
        now = self._now()
        with self._lock:
            entry = self._entries.get(key)
            if entry and entry.is_fresh(now):
                return entry.value
            if entry:
                del self._entries[key]
        return None

    def set(self, key: CacheKey, value: WeatherSummary) -> None:
        with self._lock:
            self._entries[key] = CacheEntry(
                value=value, cached_at=self._now(), ttl_seconds=self._ttl_seconds
            )

    def clear(self) -> None:
        """Drop all cached entries."""
        with self._lock:
            self._entries.clear()
        logger.info("Weather cache cleared")

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    async def fetch_summary(
        self,
        destination: str,
        start: date,
        end: date,
        unit: TemperatureUnit | None = None,
    ) -> WeatherSummary:
        """Cached summary, fresh lookup, or month-based fallback.

        Args:
            destination: City name (e.g. "Paris")
            start: Trip start; part of the cache key and drives the fallback
            end: Trip end (not part of the key)
            unit: Temperature unit; defaults to the configured preference

        Returns:
            WeatherSummary (never raises)
        """
        unit = unit or self._default_unit
        key = self.make_key(destination, start, unit)

        cached = self.get(key)
        if cached is not None:
            logger.info(f"Using cached weather for {destination}")
            self._metrics.inc_cache_hit()
            return cached

        if not self._single_flight:
            return await self._load(key, destination, start, unit)

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._load(key, destination, start, unit))
            self._inflight[key] = task
            task.add_done_callback(lambda _: self._inflight.pop(key, None))
        return await asyncio.shield(task)

    async def _load(
        self, key: CacheKey, destination: str, start: date, unit: TemperatureUnit
    ) -> WeatherSummary:
        try:
            result = await self._lookup.lookup(destination, unit)
        except Exception as e:
            logger.exception(f"Weather lookup raised for {destination}")
            result = TierResult.fail(FailureKind.TRANSPORT, type(e).__name__)

        if result.ok and result.value is not None:
            self.set(key, result.value)
            return result.value

        logger.warning(
            f"Weather lookup failed for {destination} ({result.failure}: {result.detail}), "
            "using seasonal fallback"
        )
        return fallback_weather(start)
