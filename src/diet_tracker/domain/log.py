"""Domain models for the daily food log."""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class LogEntry:
    """A logged portion of a catalog food."""

    food_id: str
    servings: float
    logged_at: datetime


@dataclass(frozen=True)
class ListedEntry:
    """Display row for a logged entry."""

    position: int
    food_id: str
    servings: float
    calories: float


@dataclass(frozen=True)
class DaySummary:
    """Consumed calories against the target for a single day."""

    day: date
    consumed: float
    target: float | None

    @property
    def difference(self) -> float | None:
        """Consumed minus target; negative means calories still available."""
        if self.target is None:
            return None
        return self.consumed - self.target
