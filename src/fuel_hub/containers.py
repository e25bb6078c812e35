"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from fuel_hub.adapters.document_repositories import (
    DocumentHistoryRepository,
    DocumentMealRepository,
    DocumentProfileRepository,
)
from fuel_hub.adapters.openai_coach_client import OpenAICoachClient
from fuel_hub.adapters.supabase_document_store import SupabaseDocumentStore
from fuel_hub.config import Settings
from fuel_hub.domain.events import ChangeEvent, HistoryChanged, MealsChanged
from fuel_hub.services.coach import CoachService
from fuel_hub.services.events import ChangeNotifier
from fuel_hub.services.history import HistoryService
from fuel_hub.services.meals import MealJournalService
from fuel_hub.services.profile import ProfileService

_logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    notifier: ChangeNotifier
    profile_service: ProfileService
    history_service: HistoryService
    meal_journal_service: MealJournalService
    coach_service: CoachService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    store = SupabaseDocumentStore(
        supabase_client, table=resolved_settings.documents_table
    )
    notifier = ChangeNotifier()
    notifier.subscribe(log_change)
    profile_service = ProfileService(DocumentProfileRepository(store), notifier)
    history_service = HistoryService(
        repository=DocumentHistoryRepository(store),
        notifier=notifier,
        timezone_name=resolved_settings.timezone,
        limit=resolved_settings.history_limit,
    )
    meal_journal_service = MealJournalService(DocumentMealRepository(store), notifier)
    openai_client = OpenAICoachClient.create(
        resolved_settings.openai_api_key, store=resolved_settings.openai_store
    )
    coach_service = CoachService(
        client=openai_client,
        model=resolved_settings.openai_model,
        workout_model=resolved_settings.openai_workout_model,
        temperature=resolved_settings.openai_temperature,
    )

    async def close_resources() -> None:
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        notifier=notifier,
        profile_service=profile_service,
        history_service=history_service,
        meal_journal_service=meal_journal_service,
        coach_service=coach_service,
        close_resources=close_resources,
    )


def log_change(event: ChangeEvent) -> None:
    """Log every shared-state write."""
    if isinstance(event, HistoryChanged):
        _logger.info("History updated: %s entries", len(event.entries))
    elif isinstance(event, MealsChanged):
        _logger.info("Meal journal updated: %s meals", len(event.meals))
    else:
        _logger.info("Profile saved")
