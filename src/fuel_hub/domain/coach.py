"""Models for AI coach responses."""

from typing import Literal

from pydantic import BaseModel, Field


class ResearchSource(BaseModel):
    """A web source cited by a grounded response."""

    title: str
    uri: str


class CoachReply(BaseModel):
    """Raw text returned by the AI coach with any citations."""

    text: str
    sources: list[ResearchSource] = Field(default_factory=list)


class ResearchResult(BaseModel):
    """Grounded research or planning output."""

    text: str
    sources: list[ResearchSource] = Field(default_factory=list)


class MacroEstimate(BaseModel):
    """Macros extracted from a meal analysis."""

    protein: int = Field(ge=0)
    carbs: int = Field(ge=0)
    fats: int = Field(ge=0)
    calories: int = Field(ge=0)


class MealAnalysis(BaseModel):
    """Meal analysis text with the macros parsed from it."""

    text: str
    macros: MacroEstimate | None = None
    warning: str | None = None


class Exercise(BaseModel):
    """Single prescribed movement within a training day."""

    name: str
    sets: str = "3"
    reps: str = "10"
    rest: str = "60s"
    rpe: str = "8"
    alt: str = ""


class DayBlock(BaseModel):
    """A header, exercise or free-text line of a training day."""

    type: Literal["header", "exercise", "text"]
    content: str | None = None
    exercise: Exercise | None = None


class WorkoutDay(BaseModel):
    """One day of a generated training split."""

    title: str
    blocks: list[DayBlock]


class WorkoutPlan(BaseModel):
    """Generated training split with its raw text."""

    raw: str
    days: list[WorkoutDay]
