"""Deterministic rule-based packing list generation.

This is the terminal fallback for every generation strategy: it has no
network or model dependency and always returns Essentials and Clothing.
Output order is fixed: Essentials, Clothing, Weather Essentials (if any),
Toiletries, Activities (if any).
"""

from collections.abc import Iterable

from packpal.engine.models.packing import PackingCategory, PackingItem
from packpal.engine.models.trip import Trip, TripActivity, TripOccasion, WeatherCondition

BASE_ESSENTIALS = (
    "Passport / ID",
    "Wallet & Cards",
    "Phone + Charger",
    "Medications",
    "Travel Documents",
)

WORK_ESSENTIALS = ("Laptop + Charger", "Business Cards")

BASE_TOILETRIES = (
    "Toothbrush & Toothpaste",
    "Deodorant",
    "Shampoo & Conditioner",
    "Body Wash/Soap",
    "Face Wash",
    "Moisturizer",
    "Hair Brush/Comb",
)

SUN_TOILETRIES = ("Sunscreen", "After-Sun Lotion")

GROOMING_TOILETRIES = ("Makeup/Grooming Kit", "Perfume/Cologne", "Hair Styling Products")

WEATHER_GEAR: dict[WeatherCondition, tuple[str, ...]] = {
    WeatherCondition.rainy: ("Umbrella", "Rain Jacket/Poncho", "Waterproof Shoes"),
    WeatherCondition.hot: ("Sunscreen SPF 50+", "Aloe Vera (sunburn)", "Lip Balm SPF", "Cooling Towel"),
    WeatherCondition.warm: ("Sunscreen SPF 50+", "Aloe Vera (sunburn)", "Lip Balm SPF", "Cooling Towel"),
    WeatherCondition.cold: ("Hand Warmers", "Insulated Water Bottle"),
    WeatherCondition.snowy: ("Hand Warmers", "Insulated Water Bottle"),
    WeatherCondition.moderate: (),
    WeatherCondition.cool: (),
    WeatherCondition.variable: (),
}

WATER_BUNDLE = (
    "Swimsuit",
    "Beach Towel",
    "Flip Flops",
    "Waterproof Phone Case",
    "Snorkel Gear (optional)",
)

# Bundles are emitted in this order; beach and swimming share one bundle.
ACTIVITY_BUNDLES: tuple[tuple[frozenset[TripActivity], tuple[str, ...]], ...] = (
    (frozenset({TripActivity.beach, TripActivity.swimming}), WATER_BUNDLE),
    (
        frozenset({TripActivity.hiking}),
        (
            "Hiking Boots",
            "Daypack/Backpack",
            "Water Bottle",
            "Trail Snacks",
            "First Aid Kit",
            "Hiking Poles (optional)",
        ),
    ),
    (
        frozenset({TripActivity.skiing}),
        (
            "Ski Jacket & Pants",
            "Thermal Base Layers",
            "Ski Goggles",
            "Gloves (waterproof)",
            "Ski Socks",
            "Helmet (or rent)",
        ),
    ),
    (
        frozenset({TripActivity.sports}),
        ("Athletic Wear", "Running Shoes", "Gym Bag", "Workout Towel"),
    ),
    (
        frozenset({TripActivity.photography}),
        ("Camera + Lenses", "Extra Batteries", "Memory Cards", "Tripod"),
    ),
)

SUNNY = frozenset({WeatherCondition.hot, WeatherCondition.warm})
FREEZING = frozenset({WeatherCondition.cold, WeatherCondition.snowy})
WORK_OCCASIONS = frozenset({TripOccasion.business, TripOccasion.conference})
DRESSY_OCCASIONS = frozenset({TripOccasion.romantic, TripOccasion.wedding})
SANDAL_OCCASIONS = frozenset({TripOccasion.vacation, TripOccasion.adventure, TripOccasion.family})


def _items(names: Iterable[str]) -> list[PackingItem]:
    return [PackingItem(name=name) for name in names]


def tops_quantity(days: int) -> int:
    """One top per day."""
    return max(1, days)


def bottoms_quantity(days: int) -> int:
    """Bottoms are re-worn: ceil(days / 2), at least 2."""
    return max(2, (max(1, days) + 1) // 2)


def underwear_quantity(days: int) -> int:
    """One per day plus a spare."""
    return max(1, days) + 1


def socks_quantity(days: int) -> int:
    """One pair per day plus a spare."""
    return max(1, days) + 1


def _essentials(occasion: TripOccasion) -> list[PackingItem]:
    items = _items(BASE_ESSENTIALS)
    if occasion in WORK_OCCASIONS:
        items += _items(WORK_ESSENTIALS)
    return items


def _occasion_wear(occasion: TripOccasion, weather: WeatherCondition, days: int) -> list[PackingItem]:
    tops = tops_quantity(days)
    bottoms = bottoms_quantity(days)

    if occasion == TripOccasion.wedding:
        return _items(("Wedding Attire (Dress/Suit)", "Dress Shoes", "Formal Accessories"))

    if occasion in WORK_OCCASIONS:
        return [
            PackingItem(name="Business Suits", quantity=min(3, days)),
            PackingItem(name="Dress Shirts", quantity=tops),
            PackingItem(name="Dress Pants", quantity=bottoms),
            PackingItem(name="Ties/Scarves", quantity=2),
            PackingItem(name="Dress Shoes"),
            PackingItem(name="Belt"),
        ]

    if occasion == TripOccasion.romantic:
        return [
            PackingItem(name="Evening Wear", quantity=2),
            PackingItem(name="Smart Casual Outfits", quantity=max(1, tops - 2)),
            PackingItem(name="Nice Pants/Skirts", quantity=bottoms),
            PackingItem(name="Dress Shoes"),
            PackingItem(name="Accessories"),
        ]

    # Casual occasions: vacation, adventure, family, solo, group, other
    items = [
        PackingItem(name="T-Shirts/Tops", quantity=tops),
        PackingItem(name="Pants/Jeans", quantity=bottoms),
    ]
    if weather in SUNNY:
        items.append(PackingItem(name="Shorts", quantity=max(2, days // 2)))
    return items


def _weather_layers(occasion: TripOccasion, weather: WeatherCondition, days: int) -> list[PackingItem]:
    match weather:
        case WeatherCondition.hot | WeatherCondition.warm:
            items = _items(("Sun Hat/Cap", "Sunglasses"))
            if occasion in SANDAL_OCCASIONS:
                items.append(PackingItem(name="Sandals"))
            return items
        case WeatherCondition.cool:
            return [
                PackingItem(name="Light Jacket"),
                PackingItem(name="Long Pants", quantity=bottoms_quantity(days)),
            ]
        case WeatherCondition.cold | WeatherCondition.snowy:
            return [
                PackingItem(name="Winter Coat"),
                PackingItem(name="Warm Sweaters", quantity=2),
                PackingItem(name="Thermal Underwear"),
                PackingItem(name="Gloves"),
                PackingItem(name="Winter Hat/Beanie"),
                PackingItem(name="Scarf"),
                PackingItem(name="Warm Boots"),
            ]
        case WeatherCondition.moderate | WeatherCondition.rainy | WeatherCondition.variable:
            return [PackingItem(name="Light Jacket")]


def _clothing(occasion: TripOccasion, weather: WeatherCondition, days: int) -> list[PackingItem]:
    items = _occasion_wear(occasion, weather, days)
    items += [
        PackingItem(name="Underwear", quantity=underwear_quantity(days)),
        PackingItem(name="Socks", quantity=socks_quantity(days)),
        PackingItem(name="Sleepwear", quantity=2),
    ]
    items += _weather_layers(occasion, weather, days)
    return items


def _toiletries(occasion: TripOccasion, weather: WeatherCondition) -> list[PackingItem]:
    items = _items(BASE_TOILETRIES)
    if weather in SUNNY:
        items += _items(SUN_TOILETRIES)
    if occasion in DRESSY_OCCASIONS:
        items += _items(GROOMING_TOILETRIES)
    return items


def _activity_items(activities: Iterable[TripActivity]) -> list[PackingItem]:
    selected = frozenset(activities)
    items: list[PackingItem] = []
    for triggers, bundle in ACTIVITY_BUNDLES:
        if selected & triggers:
            items += _items(bundle)
    return items


def suggest_packing_categories(
    occasion: TripOccasion,
    activities: Iterable[TripActivity],
    weather: WeatherCondition,
    duration_days: int,
) -> list[PackingCategory]:
    """Map trip attributes to categorized packing items.

    Args:
        occasion: Trip occasion
        activities: Selected activities (order and duplicates are irrelevant)
        weather: Expected weather
        duration_days: Trip length; values below 1 are treated as 1

    Returns:
        Categories in fixed order; empty optional categories are omitted
    """
    days = max(1, duration_days)

    categories = [
        PackingCategory(name="Essentials", items=_essentials(occasion)),
        PackingCategory(name="Clothing", items=_clothing(occasion, weather, days)),
    ]

    weather_gear = _items(WEATHER_GEAR[weather])
    if weather_gear:
        categories.append(PackingCategory(name="Weather Essentials", items=weather_gear))

    categories.append(PackingCategory(name="Toiletries", items=_toiletries(occasion, weather)))

    activity_items = _activity_items(activities)
    if activity_items:
        categories.append(PackingCategory(name="Activities", items=activity_items))

    return categories


def categorize_trip(trip: Trip) -> list[PackingCategory]:
    """Rule-based packing list for a trip (uses expected weather)."""
    return suggest_packing_categories(
        occasion=trip.occasion,
        activities=trip.activities,
        weather=trip.expected_weather,
        duration_days=trip.duration_days,
    )
