"""Inverse-command records kept on the undo stacks."""

from dataclasses import dataclass
from datetime import date

from diet_tracker.domain.log import LogEntry
from diet_tracker.domain.profiles import Profile


@dataclass(frozen=True)
class EntryAdded:
    """An entry was appended at ``position``; undo removes it."""

    day: date
    position: int


@dataclass(frozen=True)
class EntryRemoved:
    """An entry was removed from ``position``; undo reinserts it."""

    day: date
    position: int
    entry: LogEntry


@dataclass(frozen=True)
class ProfileChanged:
    """The explicit record at ``day`` was overwritten.

    ``previous`` is ``None`` when the date had no explicit record and
    resolved through carry-over.
    """

    day: date
    previous: Profile | None


LogUndoRecord = EntryAdded | EntryRemoved
UndoRecord = EntryAdded | EntryRemoved | ProfileChanged
