from __future__ import annotations

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from hypothesis import given
from hypothesis import strategies as st

from breedline.domain.models.birth_event import BirthEvent, LitterCounts, NeonatalDeath
from breedline.domain.models.mating_event import MatingEvent
from breedline.domain.models.offspring_tracking import can_transition, is_terminal
from breedline.domain.models.pregnancy import Pregnancy

CONCEIVED = datetime(2025, 1, 1, tzinfo=timezone.utc)


def make_pregnancy(gestation_days: int = 30) -> Pregnancy:
    return Pregnancy.create(
        farm_id=uuid4(),
        dam_id=uuid4(),
        sire_id=uuid4(),
        mating_event_id=uuid4(),
        conception_date=CONCEIVED,
        expected_gestation_days=gestation_days,
    )


def make_mating(**kwargs) -> MatingEvent:
    return MatingEvent.create(
        farm_id=uuid4(),
        sire_id=uuid4(),
        dam_ids=kwargs.pop("dam_ids", [uuid4()]),
        mating_type="natural",
        mating_date=CONCEIVED,
        **kwargs,
    )


def test_pregnancy_derived_values():
    pregnancy = make_pregnancy(30)
    now = CONCEIVED + timedelta(days=12)

    assert pregnancy.expected_delivery_date == CONCEIVED + timedelta(days=30)
    assert pregnancy.days_pregnant(now) == 12
    assert pregnancy.days_remaining(now) == 18
    assert pregnancy.gestation_progress(now) == 40
    assert not pregnancy.is_overdue(now)


def test_pregnancy_progress_is_capped_and_overdue():
    pregnancy = make_pregnancy(30)
    late = CONCEIVED + timedelta(days=40)

    assert pregnancy.gestation_progress(late) == 100
    assert pregnancy.days_remaining(late) == 0
    assert pregnancy.is_overdue(late)


def test_naive_conception_date_is_treated_as_utc():
    pregnancy = Pregnancy.create(
        farm_id=uuid4(),
        dam_id=uuid4(),
        sire_id=uuid4(),
        mating_event_id=uuid4(),
        conception_date=datetime(2025, 1, 1),
        expected_gestation_days=10,
    )
    assert pregnancy.conception_date.tzinfo is timezone.utc


def test_advance_only_moves_confirmed_forward():
    pregnancy = make_pregnancy()
    assert pregnancy.advance(CONCEIVED + timedelta(days=3)) is False
    assert pregnancy.advance(CONCEIVED + timedelta(days=9)) is True
    assert pregnancy.status == "progressing"

    pregnancy.terminate("aborted", at=CONCEIVED + timedelta(days=10), reason="natural")
    assert pregnancy.advance(CONCEIVED + timedelta(days=20)) is False
    assert pregnancy.status == "aborted"
    assert not pregnancy.is_open_for_delivery


def test_mating_dedupes_dams_and_uses_mating_date_for_conception():
    dam = uuid4()
    event = make_mating(dam_ids=[dam, dam])
    assert event.dam_ids == [dam]
    assert event.conception_date == CONCEIVED

    later = CONCEIVED + timedelta(days=2)
    assert make_mating(expected_conception_date=later).conception_date == later


@pytest.mark.parametrize(
    "outcome, status",
    [("successful", "completed"), ("unknown", "completed"), ("unsuccessful", "failed")],
)
def test_mating_outcome_sets_status(outcome, status):
    event = make_mating()
    event.record_outcome(outcome)
    assert event.status == status


def test_mating_outcome_can_only_be_upgraded_from_unknown():
    event = make_mating()
    event.record_outcome("unknown")
    assert event.can_record_outcome("successful")

    event.record_outcome("successful")
    assert event.can_record_outcome("successful")
    assert not event.can_record_outcome("unsuccessful")

    event.deactivate()
    assert not event.can_record_outcome("successful")


@given(
    total=st.integers(min_value=0, max_value=20),
    live=st.integers(min_value=0, max_value=20),
    still=st.integers(min_value=0, max_value=20),
    males=st.integers(min_value=0, max_value=20),
    females=st.integers(min_value=0, max_value=20),
)
def test_litter_counts_violations_match_rules(total, live, still, males, females):
    counts = LitterCounts(
        total_offspring=total,
        live_births=live,
        stillbirths=still,
        male_offspring=males,
        female_offspring=females,
    )
    consistent = live + still <= total and males + females <= live
    assert (counts.violations() == []) is consistent


def _birth(live: int, still: int = 0, males: int = 0, females: int = 0) -> BirthEvent:
    return BirthEvent.create(
        farm_id=uuid4(),
        pregnancy_id=uuid4(),
        dam_id=uuid4(),
        sire_id=uuid4(),
        birth_date=CONCEIVED,
        counts=LitterCounts(
            total_offspring=live + still,
            live_births=live,
            stillbirths=still,
            male_offspring=males,
            female_offspring=females,
        ),
    )


def test_birth_rates():
    event = _birth(live=6, still=2, males=2, females=4)
    event.add_neonatal_death(NeonatalDeath(offspring_id=uuid4(), date=CONCEIVED))

    assert event.success_rate == 75.0
    assert event.stillbirth_rate == 25.0
    assert event.survival_rate == 83.33
    assert event.gender_ratio == {"male": 2, "female": 4, "ratio": 0.5}


def test_empty_litter_rates_are_zero():
    event = _birth(live=0)
    assert event.success_rate == 0.0
    assert event.survival_rate == 0.0
    assert event.gender_ratio["ratio"] is None


@pytest.mark.parametrize(
    "live, still, deaths, status",
    [
        (0, 3, 0, "failed"),
        (4, 1, 0, "partial_success"),
        (4, 0, 1, "partial_success"),
        (4, 0, 0, "completed"),
    ],
)
def test_birth_completion_status(live, still, deaths, status):
    event = _birth(live=live, still=still)
    for _ in range(deaths):
        event.add_neonatal_death(NeonatalDeath(offspring_id=uuid4(), date=CONCEIVED))
    event.complete()
    assert event.status == status


@pytest.mark.parametrize(
    "current, target, allowed",
    [
        ("alive", "weaned", True),
        ("alive", "died", True),
        ("weaned", "sold", True),
        ("weaned", "weaned", False),
        ("weaned", "alive", False),
        ("sold", "died", False),
        ("died", "alive", False),
    ],
)
def test_tracking_transitions(current, target, allowed):
    assert can_transition(current, target) is allowed


def test_terminal_statuses():
    assert not is_terminal("alive")
    assert not is_terminal("weaned")
    for status in ("sold", "died", "transferred", "culled"):
        assert is_terminal(status)
