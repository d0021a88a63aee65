"""Session facade over the catalog, log, profile history and undo."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date
from typing import Protocol

from diet_tracker.domain.errors import NotLoggedInError
from diet_tracker.domain.foods import (
    BasicFood,
    Component,
    CompositeFood,
    Food,
    FoodDefinition,
)
from diet_tracker.domain.log import DaySummary, ListedEntry, LogEntry
from diet_tracker.domain.profiles import Profile
from diet_tracker.domain.undo import LogUndoRecord, ProfileChanged
from diet_tracker.services.calculators import (
    CalculationMethod,
    get_calculator,
    parse_method,
)
from diet_tracker.services.catalog import FoodCatalog, FoodDataSource
from diet_tracker.services.daily_log import DailyLog
from diet_tracker.services.profiles import ProfileTracker
from diet_tracker.services.undo import UndoCoordinator

_logger = logging.getLogger(__name__)


class CatalogRepository(Protocol):
    """Persistence interface for the shared food catalog."""

    def load_foods(self) -> list[FoodDefinition]:
        """Return every stored food definition."""

    def save_food(self, definition: FoodDefinition) -> None:
        """Store a newly added food definition."""


class UserStateRepository(Protocol):
    """Persistence interface for a user's log and profile history."""

    def load_entries(self, username: str) -> dict[date, list[LogEntry]]:
        """Return the user's log entries grouped by date, in position order."""

    def save_entries(self, username: str, entries: dict[date, list[LogEntry]]) -> None:
        """Replace the user's stored log entries."""

    def load_profiles(self, username: str) -> list[Profile]:
        """Return the user's explicit profile records."""

    def save_profiles(self, username: str, profiles: list[Profile]) -> None:
        """Replace the user's stored profile records."""


@dataclass
class _UserState:
    username: str
    daily_log: DailyLog
    profiles: ProfileTracker
    undo: UndoCoordinator


@dataclass
class TrackerSession:
    """Single-user session: active date, calculation method and undo.

    Authentication happens before ``login``; the session only trusts the
    username it is given.
    """

    catalog: FoodCatalog
    catalog_repository: CatalogRepository
    user_repository: UserStateRepository
    calculation_method: CalculationMethod = CalculationMethod.HARRIS_BENEDICT
    active_date: date = field(default_factory=date.today)
    seed_source: FoodDataSource | None = None
    _catalog_loaded: bool = field(default=False, repr=False)
    _user: _UserState | None = field(default=None, repr=False)

    @property
    def username(self) -> str | None:
        return self._user.username if self._user else None

    def open_catalog(self) -> FoodCatalog:
        """Load the shared catalog once, seeding it when storage is empty."""
        if self._catalog_loaded:
            return self.catalog
        self.catalog.load(self.catalog_repository.load_foods())
        if not len(self.catalog) and self.seed_source is not None:
            for food in self.catalog.import_from(self.seed_source):
                self.catalog_repository.save_food(FoodDefinition.from_food(food))
            _logger.info("Catalog seeded with %s sample foods", len(self.catalog))
        self._catalog_loaded = True
        return self.catalog

    def login(self, username: str) -> DaySummary:
        """Start a session for an authenticated user."""
        if self._user is not None:
            self.logout()
        catalog = self.open_catalog()
        daily_log = DailyLog(catalog)
        for day, entries in self.user_repository.load_entries(username).items():
            daily_log.load(day, entries)
        profiles = ProfileTracker()
        profiles.load(self.user_repository.load_profiles(username))
        self._user = _UserState(
            username=username,
            daily_log=daily_log,
            profiles=profiles,
            undo=UndoCoordinator(daily_log, profiles),
        )
        _logger.info("Session started: user=%s", username)
        return self.summary()

    def logout(self) -> None:
        """Save and end the session, discarding both undo histories."""
        user = self._require_user()
        self.save()
        user.undo.clear()
        self._user = None
        _logger.info("Session ended: user=%s", user.username)

    def save(self) -> None:
        """Persist the current user's log and profile history."""
        user = self._require_user()
        entries = {
            day: list(user.daily_log.entries(day)) for day in user.daily_log.dates()
        }
        self.user_repository.save_entries(user.username, entries)
        self.user_repository.save_profiles(user.username, user.profiles.history())

    def set_active_date(self, day: date) -> DaySummary:
        """Select the date that log commands act on."""
        self.active_date = day
        return self.summary()

    def set_calculation_method(self, method: CalculationMethod | str) -> DaySummary:
        """Switch the calorie target strategy; profile history is untouched."""
        self.calculation_method = parse_method(str(method))
        return self.summary()

    def summary(self, day: date | None = None) -> DaySummary:
        """Return consumed calories against the target for a day."""
        user = self._require_user()
        target_day = day or self.active_date
        target = None
        if user.profiles.has_profile(target_day):
            target = user.profiles.compute_target(
                target_day, get_calculator(self.calculation_method)
            )
        return DaySummary(
            day=target_day,
            consumed=user.daily_log.total_calories(target_day),
            target=target,
        )

    def add_entry(self, food_id: str, servings: float) -> DaySummary:
        """Log servings of a food on the active date."""
        user = self._require_user()
        position = user.undo.add_entry(self.active_date, food_id, servings)
        _logger.info(
            "Logged food: user=%s day=%s food=%s position=%s",
            user.username,
            self.active_date,
            food_id,
            position,
        )
        return self.summary()

    def remove_entry(self, position: int) -> DaySummary:
        """Remove the entry at a 1-based position on the active date."""
        user = self._require_user()
        user.undo.remove_entry(self.active_date, position)
        return self.summary()

    def list_entries(self) -> tuple[ListedEntry, ...]:
        """Return display rows for the active date."""
        return self._require_user().daily_log.list_entries(self.active_date)

    def undo_log(self) -> tuple[LogUndoRecord, DaySummary]:
        """Undo the last log addition or removal."""
        record = self._require_user().undo.undo_log()
        return record, self.summary(record.day)

    def current_profile(self) -> Profile:
        """Return the profile in effect on the active date."""
        return self._require_user().profiles.get_profile(self.active_date)

    def update_profile(self, fields: Mapping[str, object]) -> DaySummary:
        """Record profile changes effective from the active date."""
        self._require_user().undo.update_profile(self.active_date, fields)
        return self.summary()

    def undo_profile(self) -> tuple[ProfileChanged, DaySummary]:
        """Undo the last profile update."""
        record = self._require_user().undo.undo_profile()
        return record, self.summary(record.day)

    def search_foods(
        self, query: str | None, match_all: bool = False, ranked: bool = False
    ) -> list[Food]:
        """Return catalog foods matching keywords."""
        catalog = self.open_catalog()
        search = catalog.search(query, match_all=match_all, ranked=ranked)
        results = [catalog.get(food_id) for food_id in search]
        _logger.debug("Food search: query=%s results=%s", query, len(results))
        return results

    def get_food(self, food_id: str) -> Food:
        """Return a catalog food by id."""
        return self.open_catalog().get(food_id)

    def add_basic_food(
        self,
        food_id: str,
        keywords: Iterable[str],
        calories_per_serving: float,
        name: str | None = None,
    ) -> BasicFood:
        """Add a basic food to the shared catalog and store it."""
        catalog = self.open_catalog()
        food = catalog.build_basic_food(
            food_id, keywords, calories_per_serving, name=name
        )
        self.catalog_repository.save_food(FoodDefinition.from_food(food))
        catalog.insert(food)
        return food

    def add_composite_food(
        self,
        food_id: str,
        keywords: Iterable[str],
        components: Iterable[Component | tuple[str, float]],
        name: str | None = None,
    ) -> CompositeFood:
        """Add a composite food to the shared catalog and store it."""
        catalog = self.open_catalog()
        food = catalog.build_composite_food(
            food_id, keywords, components, name=name
        )
        self.catalog_repository.save_food(FoodDefinition.from_food(food))
        catalog.insert(food)
        return food

    def _require_user(self) -> _UserState:
        if self._user is None:
            raise NotLoggedInError("Log in first")
        return self._user

