"""JSON document repositories for profile, history and meals."""

import json
import logging
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from fuel_hub.adapters.document_store import DocumentStore
from fuel_hub.domain.meals import SavedMeal
from fuel_hub.domain.profile import AthleteProfile
from fuel_hub.domain.readiness import HistoricalEntry
from fuel_hub.services.history import HistoryRepository
from fuel_hub.services.meals import MealRepository
from fuel_hub.services.profile import ProfileRepository

PROFILE_KEY = "athlete_profile"
HISTORY_KEY = "athlete_history"
MEALS_KEY = "elite_fuel_meals"

_DEFAULT_PROFILE = AthleteProfile()

_logger = logging.getLogger(__name__)


class _Document(BaseModel):
    """Stored documents use camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProfileDocument(_Document):
    """Stored shape of the athlete profile."""

    gender: Literal["male", "female"] = _DEFAULT_PROFILE.gender
    age: int = _DEFAULT_PROFILE.age
    weight_lbs: float = _DEFAULT_PROFILE.weight_lbs
    height_ft: float = _DEFAULT_PROFILE.height_ft
    height_in: float = _DEFAULT_PROFILE.height_in
    daily_activity: float = _DEFAULT_PROFILE.daily_activity
    training_freq: float = _DEFAULT_PROFILE.training_freq
    goal: Literal["maintain", "loss", "gain"] = _DEFAULT_PROFILE.goal
    season: Literal["pre", "in", "post", "off"] = _DEFAULT_PROFILE.season
    sport: str = _DEFAULT_PROFILE.sport
    position: str = _DEFAULT_PROFILE.position
    has_kitchen: bool = _DEFAULT_PROFILE.has_kitchen
    likes: str | None = None
    dislikes: str | None = None


class HistoryEntryDocument(_Document):
    """Stored shape of one readiness history entry."""

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


class SavedMealDocument(_Document):
    """Stored shape of a saved meal."""

    id: str
    date: datetime
    analysis: str
    protein: int | None = None
    carbs: int | None = None
    fats: int | None = None
    calories: int | None = None


def dump_profile(profile: AthleteProfile) -> str:
    """Serialize a profile to its stored JSON form."""
    document = ProfileDocument.model_validate(asdict(profile))
    return document.model_dump_json(by_alias=True)


def load_profile(raw: str) -> AthleteProfile:
    """Parse a stored profile, raising ValueError on malformed input."""
    document = ProfileDocument.model_validate_json(raw)
    return AthleteProfile(**document.model_dump())


def dump_history(entries: list[HistoricalEntry]) -> str:
    """Serialize history entries to their stored JSON form."""
    return json.dumps(
        [
            HistoryEntryDocument.model_validate(asdict(entry)).model_dump(
                mode="json", by_alias=True
            )
            for entry in entries
        ]
    )


def dump_meals(meals: list[SavedMeal]) -> str:
    """Serialize saved meals to their stored JSON form."""
    return json.dumps(
        [
            SavedMealDocument.model_validate(asdict(meal)).model_dump(
                mode="json", by_alias=True
            )
            for meal in meals
        ]
    )


@dataclass
class DocumentProfileRepository(ProfileRepository):
    """Profile repository over a document store."""

    store: DocumentStore
    key: str = PROFILE_KEY

    def load(self) -> AthleteProfile | None:
        """Return the stored profile, or None when missing or corrupted."""
        raw = self.store.get(self.key)
        if raw is None:
            return None
        try:
            return load_profile(raw)
        except ValueError as exc:
            _logger.warning("Ignoring unreadable profile document: %s", exc)
            return None

    def save(self, profile: AthleteProfile) -> None:
        """Overwrite the stored profile."""
        self.store.set(self.key, dump_profile(profile))


@dataclass
class DocumentHistoryRepository(HistoryRepository):
    """History repository over a document store."""

    store: DocumentStore
    key: str = HISTORY_KEY

    def load(self) -> list[HistoricalEntry]:
        """Return stored entries, skipping any that cannot be read."""
        items = _load_list(self.store.get(self.key), self.key)
        entries: list[HistoricalEntry] = []
        for item in items:
            try:
                document = HistoryEntryDocument.model_validate(item)
            except ValidationError as exc:
                _logger.warning("Skipping unreadable history entry: %s", exc)
                continue
            entries.append(HistoricalEntry(**document.model_dump()))
        return entries

    def save(self, entries: list[HistoricalEntry]) -> None:
        """Overwrite the stored history."""
        self.store.set(self.key, dump_history(entries))


@dataclass
class DocumentMealRepository(MealRepository):
    """Saved meal repository over a document store."""

    store: DocumentStore
    key: str = MEALS_KEY

    def load(self) -> list[SavedMeal]:
        """Return saved meals, skipping any that cannot be read."""
        items = _load_list(self.store.get(self.key), self.key)
        meals: list[SavedMeal] = []
        for item in items:
            try:
                document = SavedMealDocument.model_validate(item)
            except ValidationError as exc:
                _logger.warning("Skipping unreadable saved meal: %s", exc)
                continue
            meals.append(SavedMeal(**document.model_dump()))
        return meals

    def save(self, meals: list[SavedMeal]) -> None:
        """Overwrite the saved meals."""
        self.store.set(self.key, dump_meals(meals))


def _load_list(raw: str | None, key: str) -> list[object]:
    """Decode a stored JSON array, treating anything else as empty."""
    if raw is None:
        return []
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        _logger.warning("Ignoring corrupted %s document: %s", key, exc)
        return []
    if not isinstance(payload, list):
        _logger.warning("Ignoring %s document that is not a list", key)
        return []
    return payload
