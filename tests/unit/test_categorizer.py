"""Tests for the rule-based categorizer."""

from datetime import date
from itertools import product

import pytest

from packpal.engine.models import (
    PackingCategory,
    Trip,
    TripActivity,
    TripOccasion,
    WeatherCondition,
)
from packpal.engine.rules.categorizer import (
    bottoms_quantity,
    categorize_trip,
    socks_quantity,
    suggest_packing_categories,
    tops_quantity,
    underwear_quantity,
)


def by_name(categories: list[PackingCategory]) -> dict[str, PackingCategory]:
    return {c.name: c for c in categories}


def item_quantities(category: PackingCategory) -> dict[str, int]:
    return {item.name: item.quantity for item in category.items}


@pytest.mark.parametrize(
    ("occasion", "weather"), list(product(TripOccasion, WeatherCondition))
)
@pytest.mark.parametrize("days", [1, 4, 14])
def test_essentials_and_clothing_always_present(
    occasion: TripOccasion, weather: WeatherCondition, days: int
) -> None:
    categories = suggest_packing_categories(occasion, [TripActivity.other], weather, days)
    names = [c.name for c in categories]

    assert names[:2] == ["Essentials", "Clothing"]
    assert "Toiletries" in names
    assert len(names) == len(set(names))
    assert all(c.items for c in categories)
    assert all(item.quantity >= 1 and not item.is_packed for c in categories for item in c.items)


def test_output_is_deterministic() -> None:
    args = (TripOccasion.romantic, [TripActivity.hiking, TripActivity.beach], WeatherCondition.warm, 6)
    first = suggest_packing_categories(*args)
    second = suggest_packing_categories(*args)

    assert [c.model_dump() for c in first] == [c.model_dump() for c in second]


def test_activity_order_does_not_matter() -> None:
    a = suggest_packing_categories(
        TripOccasion.vacation, [TripActivity.hiking, TripActivity.beach], WeatherCondition.moderate, 3
    )
    b = suggest_packing_categories(
        TripOccasion.vacation, [TripActivity.beach, TripActivity.hiking], WeatherCondition.moderate, 3
    )
    assert [c.model_dump() for c in a] == [c.model_dump() for c in b]


def test_quantity_formulas() -> None:
    assert [tops_quantity(d) for d in (1, 2, 5)] == [1, 2, 5]
    assert [bottoms_quantity(d) for d in (1, 2, 3, 4, 5, 10)] == [2, 2, 2, 2, 3, 5]
    assert [underwear_quantity(d) for d in (1, 5)] == [2, 6]
    assert [socks_quantity(d) for d in (1, 5)] == [2, 6]


def test_quantities_non_decreasing_in_duration() -> None:
    for fn in (tops_quantity, underwear_quantity, socks_quantity, bottoms_quantity):
        values = [fn(d) for d in range(1, 31)]
        assert values == sorted(values)


def test_duration_below_one_is_clamped() -> None:
    zero = suggest_packing_categories(TripOccasion.solo, [], WeatherCondition.moderate, 0)
    one = suggest_packing_categories(TripOccasion.solo, [], WeatherCondition.moderate, 1)
    assert [c.model_dump() for c in zero] == [c.model_dump() for c in one]


def test_business_cold_scenario(business_trip: Trip) -> None:
    categories = by_name(categorize_trip(business_trip))
    clothing = item_quantities(categories["Clothing"])

    assert clothing["Business Suits"] <= 3
    assert clothing["Dress Shirts"] == 5
    assert "Winter Coat" in clothing
    assert "Thermal Underwear" in clothing
    assert clothing["Underwear"] == 6
    assert clothing["Socks"] == 6

    essentials = [i.name for i in categories["Essentials"].items]
    assert "Laptop + Charger" in essentials
    assert "Business Cards" in essentials

    weather_gear = [i.name for i in categories["Weather Essentials"].items]
    assert weather_gear == ["Hand Warmers", "Insulated Water Bottle"]
    assert "Activities" not in categories


def test_vacation_beach_hot_scenario(beach_trip: Trip) -> None:
    categories = categorize_trip(beach_trip)
    named = by_name(categories)

    assert [c.name for c in categories] == [
        "Essentials",
        "Clothing",
        "Weather Essentials",
        "Toiletries",
        "Activities",
    ]
    assert "Swimsuit" in [i.name for i in named["Activities"].items]
    assert "Sunscreen SPF 50+" in [i.name for i in named["Weather Essentials"].items]

    clothing = item_quantities(named["Clothing"])
    assert clothing["T-Shirts/Tops"] == 3
    assert clothing["Shorts"] == 2
    assert "Sun Hat/Cap" in clothing
    assert "Sandals" in clothing

    toiletries = [i.name for i in named["Toiletries"].items]
    assert "Sunscreen" in toiletries
    assert "After-Sun Lotion" in toiletries


def test_weather_essentials_omitted_when_empty() -> None:
    for weather in (WeatherCondition.moderate, WeatherCondition.cool, WeatherCondition.variable):
        names = [c.name for c in suggest_packing_categories(TripOccasion.other, [], weather, 2)]
        assert names == ["Essentials", "Clothing", "Toiletries"]


def test_rainy_weather_gear() -> None:
    named = by_name(suggest_packing_categories(TripOccasion.group, [], WeatherCondition.rainy, 2))
    assert [i.name for i in named["Weather Essentials"].items] == [
        "Umbrella",
        "Rain Jacket/Poncho",
        "Waterproof Shoes",
    ]
    assert "Light Jacket" in item_quantities(named["Clothing"])


def test_cool_weather_layers() -> None:
    named = by_name(suggest_packing_categories(TripOccasion.solo, [], WeatherCondition.cool, 6))
    clothing = item_quantities(named["Clothing"])
    assert clothing["Light Jacket"] == 1
    assert clothing["Long Pants"] == 3


def test_wedding_branch_and_grooming() -> None:
    named = by_name(suggest_packing_categories(TripOccasion.wedding, [], WeatherCondition.moderate, 3))
    clothing = [i.name for i in named["Clothing"].items]

    assert clothing[0] == "Wedding Attire (Dress/Suit)"
    assert "T-Shirts/Tops" not in clothing
    assert "Business Suits" not in clothing
    assert "Perfume/Cologne" in [i.name for i in named["Toiletries"].items]


def test_romantic_branch_quantities() -> None:
    named = by_name(suggest_packing_categories(TripOccasion.romantic, [], WeatherCondition.moderate, 5))
    clothing = item_quantities(named["Clothing"])

    assert clothing["Evening Wear"] == 2
    assert clothing["Smart Casual Outfits"] == 3
    assert clothing["Nice Pants/Skirts"] == 3


def test_base_items_follow_occasion_branch() -> None:
    named = by_name(suggest_packing_categories(TripOccasion.conference, [], WeatherCondition.moderate, 2))
    clothing = [i.name for i in named["Clothing"].items]

    assert clothing.index("Belt") < clothing.index("Underwear")
    assert clothing[-4:] == ["Underwear", "Socks", "Sleepwear", "Light Jacket"]


def test_no_shorts_or_sandals_outside_sun() -> None:
    named = by_name(suggest_packing_categories(TripOccasion.vacation, [], WeatherCondition.cold, 4))
    clothing = item_quantities(named["Clothing"])
    assert "Shorts" not in clothing
    assert "Sandals" not in clothing


def test_activity_bundles_are_additive() -> None:
    named = by_name(
        suggest_packing_categories(
            TripOccasion.adventure,
            [TripActivity.swimming, TripActivity.beach, TripActivity.skiing, TripActivity.museum],
            WeatherCondition.moderate,
            4,
        )
    )
    items = [i.name for i in named["Activities"].items]

    assert items.count("Swimsuit") == 1
    assert "Ski Goggles" in items
    assert items.index("Swimsuit") < items.index("Ski Goggles")


def test_activities_without_bundle_omit_category() -> None:
    names = [
        c.name
        for c in suggest_packing_categories(
            TripOccasion.family,
            [TripActivity.museum, TripActivity.dining, TripActivity.shopping],
            WeatherCondition.moderate,
            3,
        )
    ]
    assert "Activities" not in names


def test_categorize_trip_uses_clamped_duration() -> None:
    trip = Trip(
        destination="Oslo",
        start_date=date(2026, 3, 5),
        end_date=date(2026, 3, 1),
        occasion=TripOccasion.solo,
    )
    clothing = item_quantities(by_name(categorize_trip(trip))["Clothing"])
    assert clothing["T-Shirts/Tops"] == 1
    assert clothing["Underwear"] == 2
