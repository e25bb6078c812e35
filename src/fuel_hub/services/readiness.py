"""Daily readiness scoring."""

from fuel_hub.domain.profile import Targets
from fuel_hub.domain.readiness import DailyLog, ReadinessBreakdown
from fuel_hub.services.targets import round_half_up

MAX_SCORE = 100
GOOD_SLEEP_HOURS = 8
MIN_SLEEP_HOURS = 6

# (max relative deviation, credit), checked in order
_ACCURACY_BANDS = ((0.05, 1.0), (0.15, 0.7), (0.25, 0.3))

_PROTEIN_WEIGHT = 20
_CARB_WEIGHT = 20
_FAT_WEIGHT = 10


def score_readiness(log: DailyLog, targets: Targets) -> ReadinessBreakdown:
    """Score a day's check-in against the athlete's targets."""
    performance = 0
    if log.trained:
        performance += 15
    if log.water:
        performance += 5
    if log.sleep >= GOOD_SLEEP_HOURS:
        performance += 10
    elif log.sleep >= MIN_SLEEP_HOURS:
        performance += 5

    # Stress and soreness are inverted: 1 is best, 10 is worst.
    subjective = (11 - log.stress) + (11 - log.soreness)

    nutrition = (
        target_credit(log.actual_protein, targets.protein_g) * _PROTEIN_WEIGHT
        + target_credit(log.actual_carbs, targets.carb_g) * _CARB_WEIGHT
        + target_credit(log.actual_fats, targets.fat_g) * _FAT_WEIGHT
    )

    total = min(MAX_SCORE, round_half_up(performance + subjective + nutrition))
    return ReadinessBreakdown(
        performance=performance,
        subjective=subjective,
        nutrition=nutrition,
        total=total,
    )


def target_credit(actual: float, target: float) -> float:
    """Return the share of credit earned for hitting a macro target."""
    if target == 0:
        return 0.0
    deviation = abs(actual - target) / target
    for limit, credit in _ACCURACY_BANDS:
        if deviation <= limit:
            return credit
    return 0.0


def readiness_band(score: int) -> str:
    """Label a readiness score for display."""
    if score > 85:  # noqa: PLR2004
        return "OPTIMIZED"
    if score > 60:  # noqa: PLR2004
        return "FUNCTIONAL"
    return "RECOVERY REQUIRED"
