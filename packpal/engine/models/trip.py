"""Trip models - read-only input to the generation engine."""

from datetime import date
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class TripOccasion(str, Enum):
    """Trip occasion that drives formal-wear and toiletry choices."""

    business = "Business"
    vacation = "Vacation"
    adventure = "Adventure"
    family = "Family Visit"
    romantic = "Romantic Getaway"
    solo = "Solo Travel"
    group = "Group Trip"
    wedding = "Wedding"
    conference = "Conference"
    other = "Other"


class TripActivity(str, Enum):
    """Planned activity."""

    beach = "Beach"
    hiking = "Hiking"
    skiing = "Skiing"
    swimming = "Swimming"
    city_tour = "City Tour"
    museum = "Museum Visits"
    dining = "Fine Dining"
    shopping = "Shopping"
    photography = "Photography"
    business = "Business Meetings"
    sports = "Sports Events"
    concerts = "Concerts/Shows"
    camping = "Camping"
    fishing = "Fishing"
    other = "Other"


class WeatherCondition(str, Enum):
    """Expected weather chosen by the traveller."""

    hot = "Hot (80°F+)"
    warm = "Warm (70-80°F)"
    moderate = "Moderate (60-70°F)"
    cool = "Cool (50-60°F)"
    cold = "Cold (Below 50°F)"
    rainy = "Rainy"
    snowy = "Snowy"
    variable = "Variable"


class TripType(str, Enum):
    """Trip type."""

    leisure = "Leisure"
    business = "Business"
    adventure = "Adventure"
    luxury = "Luxury"
    budget = "Budget"
    family = "Family"
    romantic = "Romantic"
    solo = "Solo"


class Trip(BaseModel):
    """Trip attributes consumed by the engine.

    Invalid trips (blank destination, end before start) are still accepted;
    use validation_errors() to report them. Consumers clamp duration to >= 1.
    """

    name: str = ""
    destination: str
    start_date: date
    end_date: date
    occasion: TripOccasion
    activities: list[TripActivity] = Field(default_factory=list)
    expected_weather: WeatherCondition = WeatherCondition.moderate
    trip_type: TripType = TripType.leisure

    @field_validator("activities")
    @classmethod
    def dedupe_activities(cls, v: list[TripActivity]) -> list[TripActivity]:
        """Activities behave as a set; keep first-seen order."""
        return list(dict.fromkeys(v))

    @property
    def duration(self) -> int:
        """Whole days between start and end (may be 0 or negative)."""
        return (self.end_date - self.start_date).days

    @property
    def duration_days(self) -> int:
        """Duration clamped to at least one day."""
        return max(1, self.duration)

    def validation_errors(self) -> list[str]:
        errors: list[str] = []
        if not self.name.strip():
            errors.append("Trip name is required.")
        if not self.destination.strip():
            errors.append("Destination is required.")
        if self.end_date < self.start_date:
            errors.append("End date must be on or after start date.")
        return errors
