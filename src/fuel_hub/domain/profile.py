"""Domain models for the athlete profile and its derived targets."""

from dataclasses import dataclass
from typing import Literal

Gender = Literal["male", "female"]
Goal = Literal["maintain", "loss", "gain"]
Season = Literal["pre", "in", "post", "off"]


@dataclass(frozen=True)
class AthleteProfile:
    """Biometric profile of the single athlete using the app."""

    gender: Gender = "male"
    age: int = 20
    weight_lbs: float = 180
    height_ft: float = 5
    height_in: float = 10
    daily_activity: float = 1.2
    training_freq: float = 0.2
    goal: Goal = "maintain"
    season: Season = "pre"
    sport: str = "Football"
    position: str = "Wide Receiver"
    has_kitchen: bool = True
    likes: str | None = None
    dislikes: str | None = None


@dataclass(frozen=True)
class Targets:
    """Daily energy and macronutrient targets."""

    tdee: int
    protein_g: int
    carb_g: int
    fat_g: int


SPORTS_CATALOG: dict[str, list[str]] = {
    "Football": ["Wide Receiver", "Running Back", "Lineman", "DB", "QB"],
    "Basketball": ["Guard", "Forward", "Center"],
    "Soccer": ["Forward", "Midfield", "Defense"],
    "Track & Field": ["Sprinter", "Distance", "Thrower"],
    "Combat Sports": ["Striker", "Grappler"],
    "Other": ["General Athlete"],
}
