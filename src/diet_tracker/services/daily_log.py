"""Per-date food log with positional entries."""

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime

from diet_tracker.domain.errors import (
    IndexOutOfRangeError,
    InternalConsistencyError,
    InvalidServingsError,
    UnknownFoodError,
)
from diet_tracker.domain.log import ListedEntry, LogEntry
from diet_tracker.services.catalog import FoodCatalog

_logger = logging.getLogger(__name__)


@dataclass
class DailyLog:
    """Ordered log entries per date, priced against the shared catalog.

    Positions are 1-based and follow insertion order; removing an entry
    shifts every later entry down by one.
    """

    catalog: FoodCatalog
    _entries: dict[date, list[LogEntry]] = field(default_factory=dict, repr=False)

    def add_entry(
        self,
        day: date,
        food_id: str,
        servings: float,
        timestamp: datetime | None = None,
    ) -> int:
        """Append an entry for ``day`` and return its position."""
        if food_id not in self.catalog:
            raise UnknownFoodError(food_id)
        if not math.isfinite(servings) or servings <= 0:
            raise InvalidServingsError(servings)
        entry = LogEntry(
            food_id=food_id,
            servings=float(servings),
            logged_at=timestamp or datetime.now(tz=UTC),
        )
        bucket = self._entries.setdefault(day, [])
        bucket.append(entry)
        return len(bucket)

    def remove_entry(self, day: date, position: int) -> LogEntry:
        """Remove and return the entry at ``position``."""
        bucket = self._entries.get(day, [])
        if not 1 <= position <= len(bucket):
            raise IndexOutOfRangeError(position, len(bucket))
        return bucket.pop(position - 1)

    def insert_entry_at(self, day: date, position: int, entry: LogEntry) -> None:
        """Reinsert a removed entry at its original position."""
        bucket = self._entries.setdefault(day, [])
        if not 1 <= position <= len(bucket) + 1:
            raise InternalConsistencyError(
                f"Cannot reinsert at position {position} on {day}"
            )
        bucket.insert(position - 1, entry)

    def entries(self, day: date) -> tuple[LogEntry, ...]:
        """Return the raw entries for ``day``."""
        return tuple(self._entries.get(day, ()))

    def dates(self) -> list[date]:
        """Return every date that has (or had) entries, in order."""
        return sorted(self._entries)

    def list_entries(self, day: date) -> tuple[ListedEntry, ...]:
        """Return display rows for ``day`` in position order."""
        return tuple(
            ListedEntry(
                position=position,
                food_id=entry.food_id,
                servings=entry.servings,
                calories=entry.servings * self._price(entry),
            )
            for position, entry in enumerate(self._entries.get(day, ()), start=1)
        )

    def total_calories(self, day: date) -> float:
        """Return the calories consumed on ``day``."""
        total = 0.0
        for entry in self._entries.get(day, ()):
            total += entry.servings * self._price(entry)
        return total

    def load(self, day: date, entries: Iterable[LogEntry]) -> None:
        """Replace the entries of ``day`` with persisted ones."""
        self._entries[day] = list(entries)
        _logger.debug(
            "Daily log loaded: day=%s entries=%s", day, len(self._entries[day])
        )

    def _price(self, entry: LogEntry) -> float:
        try:
            return self.catalog.calories_per_serving(entry.food_id)
        except UnknownFoodError as exc:
            raise InternalConsistencyError(
                f"Logged food {entry.food_id} is missing from the catalog"
            ) from exc
