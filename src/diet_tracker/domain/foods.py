"""Domain models for the food catalog."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Component:
    """A weighted reference from a composite food to another food."""

    food_id: str
    servings: float


@dataclass(frozen=True)
class BasicFood:
    """Atomic catalog entry with directly specified calories."""

    id: str
    name: str
    keywords: tuple[str, ...]
    calories_per_serving: float

    @property
    def is_composite(self) -> bool:
        return False


@dataclass(frozen=True)
class CompositeFood:
    """Recipe-style entry whose calories are cached at creation time."""

    id: str
    name: str
    keywords: tuple[str, ...]
    components: tuple[Component, ...]
    calories_per_serving: float

    @property
    def is_composite(self) -> bool:
        return True


Food = BasicFood | CompositeFood


@dataclass(frozen=True)
class FoodDefinition:
    """Persisted form of a food, without derived values.

    Basic foods carry ``calories_per_serving``; composites carry
    ``components`` and have their calories resolved on load.
    """

    id: str
    name: str
    keywords: tuple[str, ...]
    calories_per_serving: float | None = None
    components: tuple[Component, ...] = ()

    @property
    def is_composite(self) -> bool:
        return bool(self.components)

    @classmethod
    def from_food(cls, food: Food) -> "FoodDefinition":
        """Strip derived values from a catalog food."""
        if isinstance(food, CompositeFood):
            return cls(
                id=food.id,
                name=food.name,
                keywords=food.keywords,
                components=food.components,
            )
        return cls(
            id=food.id,
            name=food.name,
            keywords=food.keywords,
            calories_per_serving=food.calories_per_serving,
        )
