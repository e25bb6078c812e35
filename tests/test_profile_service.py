"""Tests for the profile service."""

import json

from fuel_hub.adapters.document_repositories import PROFILE_KEY
from fuel_hub.domain.events import HistoryChanged, ProfileChanged
from fuel_hub.domain.profile import AthleteProfile, Targets
from fuel_hub.services.profile import ProfileService
from tests.conftest import EventRecorder, InMemoryDocumentStore


def test_get_returns_defaults_on_first_use(profile_service: ProfileService) -> None:
    profile = profile_service.get()

    assert profile == AthleteProfile()
    assert profile.sport == "Football"
    assert profile.position == "Wide Receiver"
    assert profile.has_kitchen is True


def test_merge_does_not_persist(
    profile_service: ProfileService, document_store: InMemoryDocumentStore
) -> None:
    merged = profile_service.merge({"weight_lbs": 200})

    assert merged.weight_lbs == 200
    assert merged.age == 20
    assert PROFILE_KEY not in document_store.documents


def test_update_merges_and_saves(
    profile_service: ProfileService,
    document_store: InMemoryDocumentStore,
    recorder: EventRecorder,
) -> None:
    profile_service.update({"goal": "loss"})
    updated = profile_service.update({"weight_lbs": 190, "sport": "Soccer"})

    assert updated.goal == "loss"
    assert updated.weight_lbs == 190
    assert profile_service.get() == updated
    stored = json.loads(document_store.documents[PROFILE_KEY])
    assert stored["weightLbs"] == 190
    assert stored["goal"] == "loss"
    assert recorder.events[-1] == ProfileChanged(profile=updated)


def test_save_overwrites_wholesale(
    profile_service: ProfileService, recorder: EventRecorder
) -> None:
    profile_service.update({"likes": "rice bowls"})
    replacement = AthleteProfile(gender="female", age=22, weight_lbs=135)

    profile_service.save(replacement)

    assert profile_service.get() == replacement
    assert profile_service.get().likes is None
    assert len(recorder.events) == 2
    assert not any(isinstance(event, HistoryChanged) for event in recorder.events)


def test_corrupted_profile_falls_back_to_defaults(
    profile_service: ProfileService, document_store: InMemoryDocumentStore
) -> None:
    document_store.documents[PROFILE_KEY] = "{oops"

    assert profile_service.get() == AthleteProfile()


def test_targets_follow_saved_profile(profile_service: ProfileService) -> None:
    assert profile_service.targets() == Targets(
        tdee=2566, protein_g=180, carb_g=300, fat_g=72
    )

    profile_service.update({"goal": "loss"})

    assert profile_service.targets().protein_g == 198
