"""Parsers for the text conventions the AI coach is prompted to follow."""

import re

from pydantic import ValidationError

from fuel_hub.domain.coach import (
    DayBlock,
    Exercise,
    MacroEstimate,
    WorkoutDay,
    WorkoutPlan,
)

_MACROS_HEADER = re.compile(r"^#{2,4}\s*macros\b", re.IGNORECASE | re.MULTILINE)
_MACRO_FIELDS = {
    "protein": re.compile(r"protein\**\s*:\s*\**\s*(\d+)", re.IGNORECASE),
    "carbs": re.compile(r"carbs?\**\s*:\s*\**\s*(\d+)", re.IGNORECASE),
    "fats": re.compile(r"fats?\**\s*:\s*\**\s*(\d+)", re.IGNORECASE),
    "calories": re.compile(r"calories\**\s*:\s*\**\s*(\d+)", re.IGNORECASE),
}

_DAY_BLOCK = re.compile(r"---DAY_START---(.*?)---DAY_END---", re.DOTALL)
_EXERCISE_NAME = re.compile(r"\*\*(.*?)\*\*")
_ALTERNATIVE = re.compile(r"\[ALT_START\]\s*Alt:\s*(.*?)\s*\[ALT_END\]")


class MacroParseError(ValueError):
    """Raised when a meal analysis lacks a usable macros section."""


class WorkoutParseError(ValueError):
    """Raised when a generated workout has no delimited training days."""


def parse_macros(text: str) -> MacroEstimate:
    """Extract protein, carbs, fats and calories from a meal analysis.

    The last ``### Macros`` section is preferred; without one the whole
    text is searched. Every field must be present.
    """
    headers = list(_MACROS_HEADER.finditer(text))
    section = text[headers[-1].start() :] if headers else text

    values: dict[str, int] = {}
    missing: list[str] = []
    for name, pattern in _MACRO_FIELDS.items():
        match = pattern.search(section)
        if match is None:
            missing.append(name)
            continue
        values[name] = int(match.group(1))
    if missing:
        raise MacroParseError(f"Macros missing from analysis: {', '.join(missing)}")
    try:
        return MacroEstimate.model_validate(values)
    except ValidationError as exc:
        raise MacroParseError(str(exc)) from exc


def parse_workout(text: str) -> WorkoutPlan:
    """Split a generated training split into structured days."""
    matches = list(_DAY_BLOCK.finditer(text))
    if not matches:
        raise WorkoutParseError("No ---DAY_START---/---DAY_END--- blocks found")
    days = [
        _parse_day(match.group(1), index) for index, match in enumerate(matches)
    ]
    return WorkoutPlan(raw=text, days=days)


def _parse_day(raw: str, index: int) -> WorkoutDay:
    lines = [line.strip() for line in raw.strip().splitlines()]
    title = f"Day {index + 1}"
    for line in lines:
        if line.startswith("### Day"):
            title = line.removeprefix("### ").strip()
            break

    blocks: list[DayBlock] = []
    for line in lines:
        if not line or line.startswith("### Day"):
            continue
        if line.startswith("###"):
            blocks.append(DayBlock(type="header", content=line.lstrip("#").strip()))
        elif line.startswith(("- **", "-**")):
            blocks.append(DayBlock(type="exercise", exercise=_parse_exercise(line)))
        else:
            blocks.append(DayBlock(type="text", content=line))
    return WorkoutDay(title=title, blocks=blocks)


def _parse_exercise(line: str) -> Exercise:
    """Parse ``- **Name** | S x R | **Rest: T** | RPE: N [ALT_START] ...``."""
    parts = [part.strip() for part in line.split("|")]
    name_match = _EXERCISE_NAME.search(parts[0])
    sets_reps = (
        [value.strip() for value in re.split(r"\s*[xX]\s*", parts[1], maxsplit=1)]
        if len(parts) > 1
        else []
    )
    rest = ""
    if len(parts) > 2:  # noqa: PLR2004
        rest = parts[2].replace("**Rest:", "").replace("Rest:", "").replace("**", "")
    rpe = ""
    if len(parts) > 3:  # noqa: PLR2004
        rpe = parts[3].split("[ALT_START]")[0].replace("RPE:", "").strip()
    alt_match = _ALTERNATIVE.search(line)

    exercise = Exercise(
        name=name_match.group(1).strip() if name_match else "Unknown Movement",
        alt=alt_match.group(1) if alt_match else "",
    )
    updates: dict[str, str] = {}
    if sets_reps and sets_reps[0]:
        updates["sets"] = sets_reps[0]
    if len(sets_reps) > 1 and sets_reps[1]:
        updates["reps"] = sets_reps[1]
    if rest.strip():
        updates["rest"] = rest.strip()
    if rpe:
        updates["rpe"] = rpe
    return exercise.model_copy(update=updates)
