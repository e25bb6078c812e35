"""Meal journal for saved meal analyses."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import uuid4

from fuel_hub.domain.coach import MacroEstimate
from fuel_hub.domain.events import MealsChanged
from fuel_hub.domain.meals import SavedMeal
from fuel_hub.services.events import ChangeNotifier

RECENT_MEALS_LIMIT = 4


class MealRepository(Protocol):
    """Persistence interface for saved meals."""

    def load(self) -> list[SavedMeal]:
        """Return saved meals, newest first."""

    def save(self, meals: list[SavedMeal]) -> None:
        """Overwrite the saved meals."""


@dataclass
class MealJournalService:
    """Service for saving and listing analyzed meals."""

    repository: MealRepository
    notifier: ChangeNotifier

    def save_meal(
        self, analysis: str | None, macros: MacroEstimate | None
    ) -> SavedMeal:
        """Prepend a meal to the journal and return it."""
        meal = SavedMeal(
            id=str(uuid4()),
            date=datetime.now(tz=UTC),
            analysis=analysis or "Manual entry",
            protein=macros.protein if macros else None,
            carbs=macros.carbs if macros else None,
            fats=macros.fats if macros else None,
            calories=macros.calories if macros else None,
        )
        meals = [meal, *self.repository.load()]
        self.repository.save(meals)
        self.notifier.publish(MealsChanged(meals=tuple(meals)))
        return meal

    def recent(self, limit: int = RECENT_MEALS_LIMIT) -> list[SavedMeal]:
        """Return the newest saved meals."""
        return self.repository.load()[:limit]
