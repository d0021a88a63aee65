"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime

import pytest

from diet_tracker.adapters.supabase_catalog_repository import SupabaseCatalogRepository
from diet_tracker.adapters.supabase_user_state_repository import (
    SupabaseUserStateRepository,
)
from diet_tracker.domain.foods import Component, FoodDefinition
from diet_tracker.domain.log import LogEntry
from diet_tracker.domain.profiles import ActivityLevel, Gender, Profile


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": [], "delete": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    actions: list[str] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        self.actions.append(action)
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def test_supabase_catalog_repository_loads_both_kinds() -> None:
    client = FakeSupabaseClient()
    client.table("foods").queue(
        "select",
        [
            {
                "id": "bread",
                "name": "Bread",
                "kind": "basic",
                "keywords": ["bread"],
                "calories_per_serving": 80,
                "components": [],
            },
            {
                "id": "toast",
                "name": None,
                "kind": "composite",
                "keywords": ["toast"],
                "calories_per_serving": None,
                "components": [{"food_id": "bread", "servings": 2}],
            },
        ],
    )

    foods = SupabaseCatalogRepository(client).load_foods()

    assert foods == [
        FoodDefinition("bread", "Bread", ("bread",), calories_per_serving=80.0),
        FoodDefinition(
            "toast", "toast", ("toast",), components=(Component("bread", 2.0),)
        ),
    ]


def test_supabase_catalog_repository_saves_composite() -> None:
    client = FakeSupabaseClient()
    foods_table = client.table("foods")
    foods_table.queue("insert", [{"id": "toast"}])

    SupabaseCatalogRepository(client).save_food(
        FoodDefinition(
            "toast", "Toast", ("toast",), components=(Component("bread", 2),)
        )
    )

    payload = foods_table.last_payload
    assert isinstance(payload, dict)
    assert payload["kind"] == "composite"
    assert payload["calories_per_serving"] is None
    assert payload["components"] == [{"food_id": "bread", "servings": 2}]


def test_supabase_catalog_repository_raises_on_empty_insert() -> None:
    client = FakeSupabaseClient()

    with pytest.raises(RuntimeError):
        SupabaseCatalogRepository(client).save_food(
            FoodDefinition("egg", "Egg", ("egg",), calories_per_serving=78)
        )


def test_supabase_user_state_repository_groups_entries() -> None:
    client = FakeSupabaseClient()
    entries_table = client.table("log_entries")
    entries_table.queue(
        "select",
        [
            {
                "day": "2024-01-01",
                "position": 1,
                "food_id": "apple",
                "servings": 1,
                "logged_at": "2024-01-01T08:00:00+00:00",
            },
            {
                "day": "2024-01-01",
                "position": 2,
                "food_id": "bread",
                "servings": 2.5,
                "logged_at": "2024-01-01T12:00:00+00:00",
            },
            {
                "day": "2024-01-02",
                "position": 1,
                "food_id": "egg",
                "servings": 1,
                "logged_at": "2024-01-02T07:30:00+00:00",
            },
        ],
    )

    entries = SupabaseUserStateRepository(client).load_entries("alice")

    assert entries_table.last_filters == [("username", "alice")]
    assert [entry.food_id for entry in entries[date(2024, 1, 1)]] == ["apple", "bread"]
    assert entries[date(2024, 1, 2)][0].logged_at == datetime(
        2024, 1, 2, 7, 30, tzinfo=UTC
    )


def test_supabase_user_state_repository_replaces_entries() -> None:
    client = FakeSupabaseClient()
    entries_table = client.table("log_entries")
    logged_at = datetime(2024, 1, 1, 8, tzinfo=UTC)

    SupabaseUserStateRepository(client).save_entries(
        "alice",
        {
            date(2024, 1, 1): [
                LogEntry("apple", 1.0, logged_at),
                LogEntry("bread", 2.0, logged_at),
            ]
        },
    )

    assert entries_table.actions == ["delete", "insert"]
    payload = entries_table.last_payload
    assert isinstance(payload, list)
    assert [row["position"] for row in payload] == [1, 2]
    assert payload[1]["food_id"] == "bread"


def test_supabase_user_state_repository_skips_insert_without_rows() -> None:
    client = FakeSupabaseClient()
    profiles_table = client.table("profiles")

    SupabaseUserStateRepository(client).save_profiles("alice", [])

    assert profiles_table.actions == ["delete"]


def test_supabase_user_state_repository_profiles_roundtrip() -> None:
    client = FakeSupabaseClient()
    profiles_table = client.table("profiles")
    profile = Profile(
        day=date(2024, 1, 1),
        gender=Gender.FEMALE,
        height_cm=165.0,
        age=25,
        weight_kg=60.0,
        activity_level=ActivityLevel.LIGHTLY_ACTIVE,
    )
    repository = SupabaseUserStateRepository(client)

    repository.save_profiles("alice", [profile])
    stored = profiles_table.last_payload
    assert isinstance(stored, list)
    profiles_table.queue("select", stored)

    assert repository.load_profiles("alice") == [profile]
