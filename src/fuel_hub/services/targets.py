"""Energy and macro target calculations."""

import math

from fuel_hub.domain.profile import AthleteProfile, Targets

LBS_PER_KG = 2.20462
CM_PER_INCH = 2.54
PROTEIN_KCAL_PER_G = 4
CARB_KCAL_PER_G = 4
FAT_KCAL_PER_G = 9

_GOAL_ENERGY_FACTOR = {"loss": 0.85, "gain": 1.15}


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going toward +infinity."""
    return math.floor(value + 0.5)


def basal_metabolic_rate(profile: AthleteProfile) -> float:
    """Return the Mifflin-St Jeor BMR in kcal."""
    weight_kg = profile.weight_lbs / LBS_PER_KG
    height_cm = (profile.height_ft * 12 + profile.height_in) * CM_PER_INCH
    base = 10 * weight_kg + 6.25 * height_cm - 5 * profile.age
    if profile.gender == "male":
        return base + 5
    return base - 161


def calculate_targets(profile: AthleteProfile) -> Targets:
    """Derive daily calorie and macro targets from a profile."""
    bmr = basal_metabolic_rate(profile)
    tdee = round_half_up(bmr * (profile.daily_activity + profile.training_freq))
    factor = _GOAL_ENERGY_FACTOR.get(profile.goal)
    if factor is not None:
        tdee = round_half_up(tdee * factor)

    protein_per_lb = 1.1 if profile.goal == "loss" else 1.0
    protein_g = round_half_up(profile.weight_lbs * protein_per_lb)
    fat_g = round_half_up(profile.weight_lbs * 0.4)
    remaining_kcal = tdee - (protein_g * PROTEIN_KCAL_PER_G + fat_g * FAT_KCAL_PER_G)
    carb_g = max(0, round_half_up(remaining_kcal / CARB_KCAL_PER_G))
    return Targets(tdee=tdee, protein_g=protein_g, carb_g=carb_g, fat_g=fat_g)
