"""Prompt templates for remote packing list generation."""

from datetime import date

from packpal.engine.models.trip import Trip
from packpal.engine.models.weather import WeatherSummary

PACKING_CATEGORIES = (
    "Essentials (documents, money, phone, etc.)",
    "Clothing (appropriate for weather and activities)",
    "Toiletries (personal care items)",
    "Electronics (chargers, adapters, etc.)",
    "Activities (gear specific to planned activities)",
    "Health & Safety (medications, first aid, etc.)",
)


def format_date(d: date) -> str:
    """Medium date style, e.g. 'Oct 18, 2026'."""
    return f"{d:%b} {d.day}, {d.year}"


def activities_text(trip: Trip, empty: str = "general activities") -> str:
    names = ", ".join(activity.value for activity in trip.activities)
    return names or empty


def weather_text(trip: Trip, weather: WeatherSummary | None) -> str:
    """Live weather line when available, else the trip's expected weather."""
    if weather is None:
        return f"Expected weather: {trip.expected_weather.value}"
    if weather.current_temp is None:
        return f"Current weather: {weather.description}"
    return (
        f"Current weather: {weather.description}, "
        f"temperature around {int(weather.current_temp)}°{weather.unit.symbol}"
    )


def build_packing_prompt(trip: Trip, weather: WeatherSummary | None = None) -> str:
    """Build the generation prompt asking for a CATEGORY:/- item list."""
    lines = [
        f"Create a detailed packing list for a {trip.duration_days}-day trip to "
        f"{trip.destination} from {format_date(trip.start_date)} to {format_date(trip.end_date)}.",
        "",
        "Trip Details:",
        f"- Trip Type: {trip.trip_type.value}",
        f"- Occasion: {trip.occasion.value}",
        f"- Activities: {activities_text(trip)}",
        f"- {weather_text(trip, weather)}",
        "",
        "Consider the destination, dates, activities, and weather conditions when suggesting items.",
        "",
        "Organize the packing list into these categories with specific items for each:",
    ]
    lines += [f"{i}. {category}" for i, category in enumerate(PACKING_CATEGORIES, start=1)]
    lines += [
        "",
        "Format each category as:",
        "CATEGORY_NAME:",
        "- item 1",
        "- item 2",
        "- item 3",
        "",
        "Be specific about quantities and consider the trip duration and weather conditions.",
    ]
    return "\n".join(lines)
