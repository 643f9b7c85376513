"""Shared pytest fixtures for all test suites."""

from collections.abc import Callable
from datetime import date

import httpx
import pytest

from packpal.engine.models import Trip, TripActivity, TripOccasion, WeatherCondition

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def business_trip() -> Trip:
    """Five-day business trip in cold weather."""
    return Trip(
        name="Q4 offsite",
        destination="Chicago",
        start_date=date(2026, 12, 1),
        end_date=date(2026, 12, 6),
        occasion=TripOccasion.business,
        activities=[],
        expected_weather=WeatherCondition.cold,
    )


@pytest.fixture
def beach_trip() -> Trip:
    """Three-day beach vacation in hot weather."""
    return Trip(
        name="Summer break",
        destination="Cancun",
        start_date=date(2026, 7, 10),
        end_date=date(2026, 7, 13),
        occasion=TripOccasion.vacation,
        activities=[TripActivity.beach],
        expected_weather=WeatherCondition.hot,
    )


@pytest.fixture
def mock_client() -> Callable[[Handler], httpx.AsyncClient]:
    """Build an httpx.AsyncClient backed by a MockTransport handler."""

    def build(handler: Handler) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return build
