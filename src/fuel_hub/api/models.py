"""Pydantic models for API request and response bodies."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from fuel_hub.domain.coach import MacroEstimate


class ProfilePayload(BaseModel):
    """Full athlete profile."""

    gender: Literal["male", "female"]
    age: int = Field(gt=0)
    weight_lbs: float = Field(gt=0)
    height_ft: float = Field(ge=0)
    height_in: float = Field(ge=0)
    daily_activity: float = Field(ge=0)
    training_freq: float = Field(ge=0)
    goal: Literal["maintain", "loss", "gain"]
    season: Literal["pre", "in", "post", "off"]
    sport: str
    position: str
    has_kitchen: bool
    likes: str | None = None
    dislikes: str | None = None


class ProfilePatch(BaseModel):
    """Partial profile update; omitted fields keep their saved values."""

    gender: Literal["male", "female"] | None = None
    age: int | None = Field(default=None, gt=0)
    weight_lbs: float | None = Field(default=None, gt=0)
    height_ft: float | None = Field(default=None, ge=0)
    height_in: float | None = Field(default=None, ge=0)
    daily_activity: float | None = Field(default=None, ge=0)
    training_freq: float | None = Field(default=None, ge=0)
    goal: Literal["maintain", "loss", "gain"] | None = None
    season: Literal["pre", "in", "post", "off"] | None = None
    sport: str | None = None
    position: str | None = None
    has_kitchen: bool | None = None
    likes: str | None = None
    dislikes: str | None = None


class TargetsResponse(BaseModel):
    """Daily energy and macro targets."""

    tdee: int
    protein_g: int
    carb_g: int
    fat_g: int


class DailyLogPayload(BaseModel):
    """A day's readiness check-in."""

    trained: bool = False
    water: bool = False
    stress: int = Field(default=5, ge=1, le=10)
    soreness: int = Field(default=5, ge=1, le=10)
    sleep: float = Field(default=7.5, ge=0, le=24)
    actual_protein: float = Field(default=0, ge=0)
    actual_carbs: float = Field(default=0, ge=0)
    actual_fats: float = Field(default=0, ge=0)


class ReadinessResponse(BaseModel):
    """Readiness score with its breakdown."""

    performance: int
    subjective: int
    nutrition: float
    total: int
    band: str
    targets: TargetsResponse


class HistoryEntryResponse(BaseModel):
    """Committed readiness history entry."""

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


class QuestionRequest(BaseModel):
    """Free-form question for the coach."""

    question: str = Field(min_length=1)


class TextResponse(BaseModel):
    """Plain Markdown answer."""

    text: str


class MealAnalysisRequest(BaseModel):
    """Meal description and optional base64-encoded photo."""

    description: str = ""
    image_base64: str | None = None
    goal: Literal["maintain", "loss", "gain"] | None = None


class MealRefineRequest(BaseModel):
    """Follow-up details for a previous meal analysis."""

    previous_analysis: str = Field(min_length=1)
    follow_up: str = Field(min_length=1)
    goal: Literal["maintain", "loss", "gain"] | None = None


class RecipeRequest(BaseModel):
    """Ingredients available for a quick recipe."""

    ingredients: str = Field(min_length=1)
    goal: Literal["maintain", "loss", "gain"] | None = None


class SaveMealRequest(BaseModel):
    """Meal analysis to save to the journal."""

    analysis: str | None = None
    macros: MacroEstimate | None = None


class SavedMealResponse(BaseModel):
    """Saved meal journal entry."""

    id: str
    date: datetime
    analysis: str
    protein: int | None = None
    carbs: int | None = None
    fats: int | None = None
    calories: int | None = None


class GroceryPlanRequest(BaseModel):
    """Inputs for a weekly grocery plan."""

    budget: str = "60"
    location: str = ""
    favorite_foods: str = ""
    preferences: str = ""


class WorkoutRequest(BaseModel):
    """Inputs for a generated training split."""

    days: int = Field(default=4, ge=1, le=7)
    focus: str = "Hypertrophy & Strength"


class ResearchRequest(BaseModel):
    """Topic to research."""

    query: str = Field(min_length=1)
