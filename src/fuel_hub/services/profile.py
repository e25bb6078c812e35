"""Athlete profile persistence and targets."""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Protocol

from fuel_hub.domain.events import ProfileChanged
from fuel_hub.domain.profile import AthleteProfile, Targets
from fuel_hub.services.events import ChangeNotifier
from fuel_hub.services.targets import calculate_targets


class ProfileRepository(Protocol):
    """Persistence interface for the athlete profile."""

    def load(self) -> AthleteProfile | None:
        """Return the saved profile, or None when absent or unreadable."""

    def save(self, profile: AthleteProfile) -> None:
        """Overwrite the saved profile."""


@dataclass
class ProfileService:
    """Service for reading, editing and saving the athlete profile."""

    repository: ProfileRepository
    notifier: ChangeNotifier

    def get(self) -> AthleteProfile:
        """Return the saved profile or the first-use defaults."""
        return self.repository.load() or AthleteProfile()

    def merge(self, changes: Mapping[str, object]) -> AthleteProfile:
        """Return the current profile with partial changes applied, unsaved."""
        return replace(self.get(), **changes)

    def update(self, changes: Mapping[str, object]) -> AthleteProfile:
        """Merge partial changes into the profile and save the result."""
        profile = self.merge(changes)
        self.save(profile)
        return profile

    def save(self, profile: AthleteProfile) -> None:
        """Persist the profile and notify observers."""
        self.repository.save(profile)
        self.notifier.publish(ProfileChanged(profile=profile))

    def targets(self) -> Targets:
        """Return targets for the current profile."""
        return calculate_targets(self.get())
