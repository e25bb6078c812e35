"""Tests for readiness scoring."""

import pytest

from fuel_hub.domain.profile import Targets
from fuel_hub.domain.readiness import DailyLog
from fuel_hub.services.readiness import (
    readiness_band,
    score_readiness,
    target_credit,
)

TARGETS = Targets(tdee=2566, protein_g=180, carb_g=300, fat_g=72)


def test_minimum_score() -> None:
    log = DailyLog(
        trained=False,
        water=False,
        sleep=0,
        stress=10,
        soreness=10,
        actual_protein=0,
        actual_carbs=0,
        actual_fats=0,
    )

    breakdown = score_readiness(log, TARGETS)

    assert breakdown.performance == 0
    assert breakdown.subjective == 2
    assert breakdown.nutrition == 0
    assert breakdown.total == 2


def test_ceiling_score() -> None:
    log = DailyLog(
        trained=True,
        water=True,
        sleep=9,
        stress=1,
        soreness=1,
        actual_protein=180,
        actual_carbs=300,
        actual_fats=72,
    )

    breakdown = score_readiness(log, TARGETS)

    assert breakdown.performance == 30
    assert breakdown.subjective == 20
    assert breakdown.nutrition == 50
    assert breakdown.total == 100


def test_partial_credit_bands() -> None:
    log = DailyLog(
        trained=True,
        water=True,
        sleep=7,
        stress=3,
        soreness=4,
        actual_protein=189,
        actual_carbs=330,
        actual_fats=90,
    )

    breakdown = score_readiness(log, TARGETS)

    assert breakdown.performance == 25
    assert breakdown.subjective == 15
    assert breakdown.nutrition == pytest.approx(37)
    assert breakdown.total == 77


@pytest.mark.parametrize(
    ("sleep", "expected"),
    [(0, 0), (5.9, 0), (6, 5), (7.5, 5), (8, 10), (11, 10)],
)
def test_sleep_bonus(sleep: float, expected: int) -> None:
    log = DailyLog(sleep=sleep)

    assert score_readiness(log, TARGETS).performance == expected


@pytest.mark.parametrize(
    ("actual", "target", "expected"),
    [
        (100, 100, 1.0),
        (95, 100, 1.0),
        (110, 100, 0.7),
        (85, 100, 0.7),
        (125, 100, 0.3),
        (74, 100, 0.0),
        (50, 0, 0.0),
        (0, 0, 0.0),
    ],
)
def test_target_credit(actual: float, target: float, expected: float) -> None:
    assert target_credit(actual, target) == expected


def test_zero_targets_earn_no_nutrition_credit() -> None:
    targets = Targets(tdee=0, protein_g=180, carb_g=0, fat_g=72)
    log = DailyLog(actual_protein=180, actual_carbs=0, actual_fats=72)

    assert score_readiness(log, targets).nutrition == 30


def test_total_is_clamped_to_100() -> None:
    log = DailyLog(
        trained=True,
        water=True,
        sleep=9,
        stress=0,
        soreness=0,
        actual_protein=180,
        actual_carbs=300,
        actual_fats=72,
    )

    assert score_readiness(log, TARGETS).total == 100


def test_total_has_no_floor() -> None:
    log = DailyLog(stress=30, soreness=30, sleep=0)

    assert score_readiness(log, TARGETS).total == -38


@pytest.mark.parametrize(
    ("score", "band"),
    [
        (100, "OPTIMIZED"),
        (86, "OPTIMIZED"),
        (85, "FUNCTIONAL"),
        (61, "FUNCTIONAL"),
        (60, "RECOVERY REQUIRED"),
        (2, "RECOVERY REQUIRED"),
    ],
)
def test_readiness_band(score: int, band: str) -> None:
    assert readiness_band(score) == band
