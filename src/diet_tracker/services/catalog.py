"""Shared food catalog with composite calorie resolution."""

import logging
import math
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Protocol

from diet_tracker.domain.errors import (
    CyclicReferenceError,
    DuplicateIdError,
    InvalidFoodError,
    InvalidServingsError,
    UnknownComponentError,
    UnknownFoodError,
)
from diet_tracker.domain.foods import (
    BasicFood,
    Component,
    CompositeFood,
    Food,
    FoodDefinition,
)

_logger = logging.getLogger(__name__)


class FoodDataSource(Protocol):
    """Anything that can supply food definitions to the catalog."""

    def fetch_foods(self) -> list[FoodDefinition]:
        """Return food definitions, composites after or before components."""


@dataclass
class FoodCatalog:
    """Append-only catalog of basic and composite foods.

    Identifiers are unique across both kinds, composite references always
    point at existing foods, and the component graph never has a cycle.
    """

    _foods: dict[str, Food] = field(default_factory=dict, repr=False)

    def __len__(self) -> int:
        return len(self._foods)

    def __contains__(self, food_id: object) -> bool:
        return food_id in self._foods

    def __iter__(self) -> Iterator[Food]:
        return iter(list(self._foods.values()))

    def get(self, food_id: str) -> Food:
        """Return a food by id."""
        food = self._foods.get(food_id)
        if food is None:
            raise UnknownFoodError(food_id)
        return food

    def calories_per_serving(self, food_id: str) -> float:
        """Return the stored (or cached, for composites) calories."""
        return self.get(food_id).calories_per_serving

    def add_basic_food(
        self,
        food_id: str,
        keywords: Iterable[str],
        calories_per_serving: float,
        name: str | None = None,
    ) -> BasicFood:
        """Add a basic food and return it."""
        food = self.build_basic_food(food_id, keywords, calories_per_serving, name)
        self.insert(food)
        return food

    def add_composite_food(
        self,
        food_id: str,
        keywords: Iterable[str],
        components: Iterable[Component | tuple[str, float]],
        name: str | None = None,
    ) -> CompositeFood:
        """Add a composite food, caching its weighted calorie total."""
        food = self.build_composite_food(food_id, keywords, components, name)
        self.insert(food)
        return food

    def build_basic_food(
        self,
        food_id: str,
        keywords: Iterable[str],
        calories_per_serving: float,
        name: str | None = None,
    ) -> BasicFood:
        """Validate a basic food without adding it."""
        self._check_new_id(food_id)
        return _build_basic(
            FoodDefinition(
                id=food_id,
                name=name or food_id,
                keywords=_normalize_keywords(keywords),
                calories_per_serving=calories_per_serving,
            )
        )

    def build_composite_food(
        self,
        food_id: str,
        keywords: Iterable[str],
        components: Iterable[Component | tuple[str, float]],
        name: str | None = None,
    ) -> CompositeFood:
        """Validate a composite food and resolve its calories without adding it."""
        self._check_new_id(food_id)
        definition = FoodDefinition(
            id=food_id,
            name=name or food_id,
            keywords=_normalize_keywords(keywords),
            components=_normalize_components(food_id, components),
        )
        for component in definition.components:
            if component.food_id == food_id:
                raise CyclicReferenceError(food_id, [food_id, food_id])
        return self._build_composite(definition, pending={})

    def insert(self, food: Food) -> None:
        """Add a food returned by one of the ``build_*`` methods."""
        self._check_new_id(food.id)
        self._foods[food.id] = food
        _logger.info(
            "Catalog added food: id=%s composite=%s calories=%s",
            food.id,
            food.is_composite,
            food.calories_per_serving,
        )

    def search(
        self, query: str | None, match_all: bool = False, ranked: bool = False
    ) -> "FoodSearch":
        """Return a restartable, lazily evaluated keyword search."""
        terms = tuple(term.lower() for term in (query or "").split())
        return FoodSearch(catalog=self, terms=terms, match_all=match_all, ranked=ranked)

    def load(self, definitions: Iterable[FoodDefinition]) -> list[Food]:
        """Insert persisted definitions given in any order.

        Composites are resolved against already-loaded foods and the other
        pending definitions. Nothing is inserted unless every definition is
        valid.
        """
        pending: dict[str, FoodDefinition] = {}
        for definition in definitions:
            self._check_new_id(definition.id)
            if definition.id in pending:
                raise DuplicateIdError(definition.id)
            pending[definition.id] = definition

        staged: list[Food] = []
        for definition in pending.values():
            if definition.is_composite:
                staged.append(self._build_composite(definition, pending))
            else:
                staged.append(_build_basic(definition))

        for food in staged:
            self._foods[food.id] = food
        _logger.debug("Catalog loaded %s foods", len(staged))
        return staged

    def import_from(self, source: FoodDataSource) -> list[Food]:
        """Load every food a data source provides."""
        return self.load(source.fetch_foods())

    def definitions(self) -> list[FoodDefinition]:
        """Return persisted definitions in insertion order."""
        return [FoodDefinition.from_food(food) for food in self._foods.values()]

    def _check_new_id(self, food_id: str) -> None:
        if not food_id or not food_id.strip():
            raise InvalidFoodError("Food id must not be blank")
        if food_id in self._foods:
            raise DuplicateIdError(food_id)

    def _build_composite(
        self, definition: FoodDefinition, pending: Mapping[str, FoodDefinition]
    ) -> CompositeFood:
        if not definition.components:
            raise InvalidFoodError(f"Composite {definition.id} has no components")
        for component in definition.components:
            if not math.isfinite(component.servings) or component.servings <= 0:
                raise InvalidServingsError(component.servings)
        calories = self._resolve_calories(definition, pending)
        return CompositeFood(
            id=definition.id,
            name=definition.name,
            keywords=definition.keywords,
            components=definition.components,
            calories_per_serving=calories,
        )

    def _resolve_calories(
        self, root: FoodDefinition, pending: Mapping[str, FoodDefinition]
    ) -> float:
        """Depth-first weighted sum over the component graph.

        ``trail`` holds the foods on the current path; meeting one of them
        again means a cycle. Finished nodes are memoized so shared
        sub-recipes are visited once.
        """
        resolved: dict[str, float] = {}

        def visit(food_id: str, trail: tuple[str, ...]) -> float:
            if food_id in trail:
                raise CyclicReferenceError(root.id, [*trail, food_id])
            if food_id in resolved:
                return resolved[food_id]
            node: Food | FoodDefinition | None = self._foods.get(food_id)
            if node is None:
                node = pending.get(food_id)
            if node is None:
                raise UnknownComponentError(trail[-1], food_id)
            if node.is_composite:
                total = _weighted_sum(node.components, visit, (*trail, food_id))
            else:
                total = float(node.calories_per_serving or 0.0)
            resolved[food_id] = total
            return total

        return _weighted_sum(root.components, visit, (root.id,))


@dataclass(frozen=True)
class FoodSearch:
    """Keyword search over a catalog; every iteration re-runs the match."""

    catalog: FoodCatalog
    terms: tuple[str, ...]
    match_all: bool = False
    ranked: bool = False

    def __iter__(self) -> Iterator[str]:
        matches = (food for food in self.catalog if self._matches(food))
        if not self.ranked:
            return (food.id for food in matches)
        ordered = sorted(matches, key=lambda food: (not self._is_exact(food), food.id))
        return (food.id for food in ordered)

    def _matches(self, food: Food) -> bool:
        if not self.terms:
            return True
        keywords = [keyword.lower() for keyword in food.keywords]
        hits = (any(term in keyword for keyword in keywords) for term in self.terms)
        return all(hits) if self.match_all else any(hits)

    def _is_exact(self, food: Food) -> bool:
        keywords = {keyword.lower() for keyword in food.keywords}
        return any(term in keywords for term in self.terms)


def _weighted_sum(
    components: Iterable[Component],
    visit: Callable[[str, tuple[str, ...]], float],
    trail: tuple[str, ...],
) -> float:
    total = 0.0
    for component in components:
        total += component.servings * visit(component.food_id, trail)
    return total


def _build_basic(definition: FoodDefinition) -> BasicFood:
    calories = definition.calories_per_serving
    if calories is None or not math.isfinite(calories) or calories < 0:
        raise InvalidFoodError(
            f"Calories for {definition.id} must be a non-negative number"
        )
    return BasicFood(
        id=definition.id,
        name=definition.name,
        keywords=definition.keywords,
        calories_per_serving=float(calories),
    )


def _normalize_keywords(keywords: Iterable[str]) -> tuple[str, ...]:
    """Strip blanks and drop duplicates, keeping first occurrence order."""
    seen: dict[str, None] = {}
    for keyword in keywords:
        cleaned = keyword.strip()
        if cleaned:
            seen.setdefault(cleaned, None)
    return tuple(seen)


def _normalize_components(
    food_id: str, components: Iterable[Component | tuple[str, float]]
) -> tuple[Component, ...]:
    normalized: list[Component] = []
    for item in components:
        normalized.append(item if isinstance(item, Component) else Component(*item))
    if not normalized:
        raise InvalidFoodError(f"Composite {food_id} has no components")
    return tuple(normalized)

