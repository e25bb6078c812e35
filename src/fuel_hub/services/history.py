"""Readiness history ledger."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Protocol
from zoneinfo import ZoneInfo

from fuel_hub.domain.events import HistoryChanged
from fuel_hub.domain.profile import AthleteProfile, Targets
from fuel_hub.domain.readiness import DailyLog, HistoricalEntry
from fuel_hub.services.events import ChangeNotifier

HISTORY_LIMIT = 30

_logger = logging.getLogger(__name__)


class HistoryRepository(Protocol):
    """Persistence interface for readiness history."""

    def load(self) -> list[HistoricalEntry]:
        """Return stored entries in insertion order."""

    def save(self, entries: list[HistoricalEntry]) -> None:
        """Overwrite the stored entries."""


@dataclass
class HistoryService:
    """Owns the date-keyed, capped readiness history."""

    repository: HistoryRepository
    notifier: ChangeNotifier
    timezone_name: str = "UTC"
    limit: int = HISTORY_LIMIT
    clock: Callable[[tzinfo], datetime] = datetime.now

    def today_key(self) -> str:
        """Return today's date key in the configured calendar."""
        return date_key(self.clock(ZoneInfo(self.timezone_name)))

    def commit(
        self,
        profile: AthleteProfile,
        targets: Targets,
        daily_log: DailyLog,
        score: int,
    ) -> HistoricalEntry:
        """Upsert today's entry, trim the history and persist it."""
        entry = HistoricalEntry(
            date=self.today_key(),
            weight=profile.weight_lbs,
            calories=daily_log.actual_calories,
            protein=targets.protein_g,
            carbs=targets.carb_g,
            fats=targets.fat_g,
            score=score,
            actual_protein=daily_log.actual_protein,
            actual_carbs=daily_log.actual_carbs,
            actual_fats=daily_log.actual_fats,
        )
        entries = upsert_entry(self.repository.load(), entry, self.limit)
        self.repository.save(entries)
        _logger.info(
            "Committed readiness log",
            extra={"date": entry.date, "score": score, "entries": len(entries)},
        )
        self.notifier.publish(HistoryChanged(entries=tuple(entries)))
        return entry

    def list_history(self) -> list[HistoricalEntry]:
        """Return the stored history window, oldest first."""
        return self.repository.load()


def date_key(moment: datetime) -> str:
    """Format a date as a zero-padded MM/DD key."""
    return moment.strftime("%m/%d")


def upsert_entry(
    entries: list[HistoricalEntry], entry: HistoricalEntry, limit: int
) -> list[HistoricalEntry]:
    """Replace the entry with the same date in place or append it, then trim."""
    updated = list(entries)
    for index, existing in enumerate(updated):
        if existing.date == entry.date:
            updated[index] = entry
            break
    else:
        updated.append(entry)
    return updated[-limit:]
