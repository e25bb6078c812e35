"""Domain models for the meal journal."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class SavedMeal:
    """A meal analysis saved by the athlete."""

    id: str
    date: datetime
    analysis: str
    protein: int | None = None
    carbs: int | None = None
    fats: int | None = None
    calories: int | None = None
