"""Supabase repository for per-user log entries and profile history."""

from dataclasses import dataclass
from datetime import date, datetime

from supabase import Client

from diet_tracker.domain.log import LogEntry
from diet_tracker.domain.profiles import ActivityLevel, Gender, Profile
from diet_tracker.services.session import UserStateRepository


@dataclass
class SupabaseUserStateRepository(UserStateRepository):
    """Supabase implementation for a user's log and profiles."""

    client: Client

    def load_entries(self, username: str) -> dict[date, list[LogEntry]]:
        """Return log entries grouped by day in position order."""
        response = (
            self.client.table("log_entries")
            .select("day, position, food_id, servings, logged_at")
            .eq("username", username)
            .order("day")
            .order("position")
            .execute()
        )
        grouped: dict[date, list[LogEntry]] = {}
        for row in response.data or []:
            day = date.fromisoformat(str(row["day"]))
            grouped.setdefault(day, []).append(
                LogEntry(
                    food_id=str(row["food_id"]),
                    servings=float(row["servings"]),
                    logged_at=datetime.fromisoformat(str(row["logged_at"])),
                )
            )
        return grouped

    def save_entries(self, username: str, entries: dict[date, list[LogEntry]]) -> None:
        """Replace all stored log entries for a user."""
        self.client.table("log_entries").delete().eq("username", username).execute()
        payload = [
            {
                "username": username,
                "day": day.isoformat(),
                "position": position,
                "food_id": entry.food_id,
                "servings": entry.servings,
                "logged_at": entry.logged_at.isoformat(),
            }
            for day, day_entries in entries.items()
            for position, entry in enumerate(day_entries, start=1)
        ]
        if payload:
            self.client.table("log_entries").insert(payload).execute()

    def load_profiles(self, username: str) -> list[Profile]:
        """Return explicit profile records ordered by day."""
        response = (
            self.client.table("profiles")
            .select("*")
            .eq("username", username)
            .order("day")
            .execute()
        )
        return [_parse_profile(row) for row in response.data or []]

    def save_profiles(self, username: str, profiles: list[Profile]) -> None:
        """Replace all stored profile records for a user."""
        self.client.table("profiles").delete().eq("username", username).execute()
        payload = [
            {
                "username": username,
                "day": profile.day.isoformat(),
                "gender": profile.gender.value,
                "height_cm": profile.height_cm,
                "age": profile.age,
                "weight_kg": profile.weight_kg,
                "activity_level": int(profile.activity_level),
            }
            for profile in profiles
        ]
        if payload:
            self.client.table("profiles").insert(payload).execute()


def _parse_profile(row: dict[str, object]) -> Profile:
    """Parse a profile row into a domain model."""
    return Profile(
        day=date.fromisoformat(str(row["day"])),
        gender=Gender(str(row["gender"])),
        height_cm=float(row["height_cm"]),
        age=int(row["age"]),
        weight_kg=float(row["weight_kg"]),
        activity_level=ActivityLevel(int(row["activity_level"])),
    )
