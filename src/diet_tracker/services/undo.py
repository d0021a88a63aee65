"""Undo coordination for log and profile mutations."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime

from diet_tracker.domain.errors import EmptyUndoStackError
from diet_tracker.domain.log import LogEntry
from diet_tracker.domain.undo import (
    EntryAdded,
    EntryRemoved,
    LogUndoRecord,
    ProfileChanged,
)
from diet_tracker.services.daily_log import DailyLog
from diet_tracker.services.profiles import ProfileTracker

_logger = logging.getLogger(__name__)


@dataclass
class UndoCoordinator:
    """Applies mutations and records their inverses on two stacks.

    The log stack and the profile stack are independent: undoing one never
    touches the other. Nothing is pushed when a mutation fails.
    """

    daily_log: DailyLog
    profiles: ProfileTracker
    _log_stack: list[LogUndoRecord] = field(default_factory=list, repr=False)
    _profile_stack: list[ProfileChanged] = field(default_factory=list, repr=False)

    @property
    def log_depth(self) -> int:
        return len(self._log_stack)

    @property
    def profile_depth(self) -> int:
        return len(self._profile_stack)

    def add_entry(
        self,
        day: date,
        food_id: str,
        servings: float,
        timestamp: datetime | None = None,
    ) -> int:
        """Add a log entry and remember how to remove it."""
        position = self.daily_log.add_entry(day, food_id, servings, timestamp)
        self._log_stack.append(EntryAdded(day=day, position=position))
        return position

    def remove_entry(self, day: date, position: int) -> LogEntry:
        """Remove a log entry and remember how to put it back."""
        entry = self.daily_log.remove_entry(day, position)
        self._log_stack.append(EntryRemoved(day=day, position=position, entry=entry))
        return entry

    def update_profile(self, day: date, fields: Mapping[str, object]) -> None:
        """Update the profile and remember the record it replaced."""
        previous = self.profiles.update_profile(day, fields)
        self._profile_stack.append(ProfileChanged(day=day, previous=previous))

    def undo_log(self) -> LogUndoRecord:
        """Reverse the most recent log mutation."""
        if not self._log_stack:
            raise EmptyUndoStackError("log")
        record = self._log_stack.pop()
        if isinstance(record, EntryAdded):
            self.daily_log.remove_entry(record.day, record.position)
        else:
            self.daily_log.insert_entry_at(record.day, record.position, record.entry)
        _logger.info("Undo log: %s", record)
        return record

    def undo_profile(self) -> ProfileChanged:
        """Reverse the most recent profile update."""
        if not self._profile_stack:
            raise EmptyUndoStackError("profile")
        record = self._profile_stack.pop()
        self.profiles.restore(record.day, record.previous)
        _logger.info("Undo profile: day=%s", record.day)
        return record

    def clear(self) -> None:
        """Discard both histories."""
        self._log_stack.clear()
        self._profile_stack.clear()
