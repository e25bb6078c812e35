"""Domain models for daily readiness logging."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DailyLog:
    """A day's check-in before it is committed to history."""

    trained: bool = False
    water: bool = False
    stress: int = 5
    soreness: int = 5
    sleep: float = 7.5
    actual_protein: float = 0
    actual_carbs: float = 0
    actual_fats: float = 0

    @property
    def actual_calories(self) -> float:
        return self.actual_protein * 4 + self.actual_carbs * 4 + self.actual_fats * 9


@dataclass(frozen=True)
class ReadinessBreakdown:
    """Readiness score split by the groups that produced it."""

    performance: int
    subjective: int
    nutrition: float
    total: int


@dataclass(frozen=True)
class HistoricalEntry:
    """Committed readiness log for one calendar day."""

    date: str
    weight: float
    calories: float
    protein: int
    carbs: int
    fats: int
    score: int
    actual_protein: float | None = None
    actual_carbs: float | None = None
    actual_fats: float | None = None
