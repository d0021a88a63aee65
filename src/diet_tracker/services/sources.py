"""Food data sources that can populate the catalog."""

from dataclasses import dataclass, field

from diet_tracker.domain.foods import Component, FoodDefinition
from diet_tracker.services.catalog import FoodDataSource


def _basic(food_id: str, name: str, keywords: str, calories: float) -> FoodDefinition:
    return FoodDefinition(
        id=food_id,
        name=name,
        keywords=tuple(keywords.split()),
        calories_per_serving=calories,
    )


def _composite(
    food_id: str, name: str, keywords: str, components: list[tuple[str, float]]
) -> FoodDefinition:
    return FoodDefinition(
        id=food_id,
        name=name,
        keywords=tuple(keywords.split()),
        components=tuple(Component(*item) for item in components),
    )


SAMPLE_FOODS: tuple[FoodDefinition, ...] = (
    _basic("chicken", "Chicken Breast", "chicken meat protein", 165),
    _basic("apple", "Apple", "apple fruit", 95),
    _basic("pb", "Peanut Butter", "peanut butter", 190),
    _basic("rice", "White Rice", "rice grain", 206),
    _basic("butter", "Butter", "butter fat", 102),
    _basic("bread", "Bread Slice", "bread grain", 80),
    _basic("egg", "Egg", "egg protein", 78),
    _basic("banana", "Banana", "banana fruit", 105),
    _basic("seeds", "Seeds", "seed seeds", 300),
    _basic("milk", "Whole Milk", "milk dairy", 149),
    _basic("sprout", "Sprouts", "sprout sprouts", 250),
    _basic("cheese", "Cheddar Cheese", "cheese dairy", 113),
    _composite(
        "pb_sandwich",
        "Peanut Butter Sandwich",
        "sandwich peanut",
        [("bread", 2), ("pb", 1)],
    ),
    _composite(
        "csalad",
        "Chicken Salad",
        "salad chicken greens",
        [("chicken", 2), ("sprout", 1)],
    ),
    _composite("vada", "Medhu Vada", "medhu vada", [("rice", 2), ("sprout", 2)]),
    _composite(
        "bshake",
        "Banana Shake",
        "shake banana bananashake",
        [("banana", 2), ("milk", 2)],
    ),
)


@dataclass
class StaticFoodSource(FoodDataSource):
    """In-process source, used to seed an empty catalog."""

    foods: tuple[FoodDefinition, ...] = field(default=SAMPLE_FOODS)

    def fetch_foods(self) -> list[FoodDefinition]:
        """Return the bundled definitions."""
        return list(self.foods)
