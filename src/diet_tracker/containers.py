"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from diet_tracker.adapters.supabase_catalog_repository import SupabaseCatalogRepository
from diet_tracker.adapters.supabase_user_state_repository import (
    SupabaseUserStateRepository,
)
from diet_tracker.config import Settings
from diet_tracker.services.catalog import FoodCatalog
from diet_tracker.services.session import TrackerSession
from diet_tracker.services.sources import StaticFoodSource


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    session: TrackerSession


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    session = TrackerSession(
        catalog=FoodCatalog(),
        catalog_repository=SupabaseCatalogRepository(supabase_client),
        user_repository=SupabaseUserStateRepository(supabase_client),
        calculation_method=resolved_settings.default_calculation_method,
        seed_source=StaticFoodSource() if resolved_settings.seed_sample_foods else None,
    )
    return AppContainer(settings=resolved_settings, session=session)
