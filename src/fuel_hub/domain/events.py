"""Change events published after shared state is written."""

from dataclasses import dataclass

from fuel_hub.domain.meals import SavedMeal
from fuel_hub.domain.profile import AthleteProfile
from fuel_hub.domain.readiness import HistoricalEntry


@dataclass(frozen=True)
class ProfileChanged:
    """The saved athlete profile was overwritten."""

    profile: AthleteProfile


@dataclass(frozen=True)
class HistoryChanged:
    """The readiness history was rewritten."""

    entries: tuple[HistoricalEntry, ...]


@dataclass(frozen=True)
class MealsChanged:
    """The meal journal was rewritten."""

    meals: tuple[SavedMeal, ...]


ChangeEvent = ProfileChanged | HistoryChanged | MealsChanged
