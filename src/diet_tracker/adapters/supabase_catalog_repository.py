"""Supabase repository for the shared food catalog."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from diet_tracker.domain.foods import Component, FoodDefinition
from diet_tracker.services.session import CatalogRepository


@dataclass
class SupabaseCatalogRepository(CatalogRepository):
    """Supabase-backed storage for food definitions."""

    client: Client

    def load_foods(self) -> list[FoodDefinition]:
        """Return every stored food in creation order."""
        response = (
            self.client.table("foods")
            .select("*")
            .order("created_at")
            .execute()
        )
        return [_parse_food(row) for row in response.data or []]

    def save_food(self, definition: FoodDefinition) -> None:
        """Insert a food definition row."""
        response = (
            self.client.table("foods")
            .insert(
                {
                    "id": definition.id,
                    "name": definition.name,
                    "kind": "composite" if definition.is_composite else "basic",
                    "keywords": list(definition.keywords),
                    "calories_per_serving": definition.calories_per_serving,
                    "components": [
                        {"food_id": item.food_id, "servings": item.servings}
                        for item in definition.components
                    ],
                    "created_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError(f"Failed to store food {definition.id}")


def _parse_food(row: dict[str, object]) -> FoodDefinition:
    """Parse a food row into a definition."""
    components = tuple(
        Component(food_id=str(item["food_id"]), servings=float(item["servings"]))
        for item in row.get("components") or []
    )
    calories = row.get("calories_per_serving")
    return FoodDefinition(
        id=str(row["id"]),
        name=str(row.get("name") or row["id"]),
        keywords=tuple(str(keyword) for keyword in row.get("keywords") or []),
        calories_per_serving=float(calories) if calories is not None else None,
        components=components if row.get("kind") == "composite" else (),
    )
