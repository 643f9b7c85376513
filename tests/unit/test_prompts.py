"""Tests for prompt construction."""

from datetime import date

from packpal.engine.llm.prompts import build_packing_prompt, format_date, weather_text
from packpal.engine.models import (
    TemperatureUnit,
    Trip,
    TripActivity,
    TripOccasion,
    TripType,
    WeatherCondition,
    WeatherSummary,
)


def make_trip(**overrides) -> Trip:
    fields = {
        "destination": "Lisbon",
        "start_date": date(2026, 10, 18),
        "end_date": date(2026, 10, 22),
        "occasion": TripOccasion.vacation,
        "activities": [TripActivity.museum, TripActivity.dining],
        "expected_weather": WeatherCondition.warm,
        "trip_type": TripType.leisure,
    }
    fields.update(overrides)
    return Trip(**fields)


def test_format_date() -> None:
    assert format_date(date(2026, 10, 18)) == "Oct 18, 2026"
    assert format_date(date(2027, 1, 3)) == "Jan 3, 2027"


def test_prompt_includes_trip_details() -> None:
    prompt = build_packing_prompt(make_trip())

    assert "4-day trip to Lisbon from Oct 18, 2026 to Oct 22, 2026" in prompt
    assert "- Trip Type: Leisure" in prompt
    assert "- Occasion: Vacation" in prompt
    assert "- Activities: Museum Visits, Fine Dining" in prompt
    assert "Expected weather: Warm (70-80°F)" in prompt
    assert "CATEGORY_NAME:" in prompt
    assert "- item 1" in prompt
    assert "6. Health & Safety (medications, first aid, etc.)" in prompt


def test_prompt_without_activities() -> None:
    prompt = build_packing_prompt(make_trip(activities=[]))
    assert "- Activities: general activities" in prompt


def test_live_weather_replaces_expected_weather() -> None:
    weather = WeatherSummary(
        icon="cloud.rain.fill",
        description="Light Rain",
        current_temp=61.7,
        unit=TemperatureUnit.fahrenheit,
    )
    prompt = build_packing_prompt(make_trip(), weather)

    assert "Current weather: Light Rain, temperature around 61°F" in prompt
    assert "Expected weather" not in prompt


def test_weather_text_without_temperature() -> None:
    weather = WeatherSummary(icon="cloud.fill", description="Variable")
    assert weather_text(make_trip(), weather) == "Current weather: Variable"
