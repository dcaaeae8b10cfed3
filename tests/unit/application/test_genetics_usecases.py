from __future__ import annotations

import asyncio
from datetime import date, datetime, timedelta, timezone
from uuid import uuid4

import pytest

from breedline.application.errors import PermissionDenied, ValidationError
from breedline.application.use_cases.genetics import (
    batch_compute,
    check_compatibility,
    compute_profile,
    genetics_dashboard,
    get_pedigree,
    pair_suggestions,
    top_breeders,
)
from breedline.utils.single_flight import SingleFlight

NOW = datetime(2025, 6, 1, tzinfo=timezone.utc)


@pytest.fixture()
def siblings(uow, farm, rabbit_type, breeding_trio):
    sire, dam, _ = breeding_trio
    litter = dict(birth_date=date(2023, 1, 1), sire_id=sire.id, dam_id=dam.id)
    brother = uow.seed_animal(farm.id, rabbit_type.id, "male", tag="KIT-1", **litter)
    sister = uow.seed_animal(farm.id, rabbit_type.id, "female", tag="KIT-2", **litter)
    return brother, sister


async def test_profile_is_cached_until_stale(uow, owner_id, breeding_trio):
    sire, _, _ = breeding_trio

    first = await compute_profile.execute(uow, owner_id, sire.id, now=NOW)
    again = await compute_profile.execute(uow, owner_id, sire.id, now=NOW + timedelta(hours=1))
    assert uow.genetic_profiles.saves == 1
    assert again.computed_at == first.computed_at

    later = NOW + timedelta(hours=25)
    stale = await compute_profile.execute(uow, owner_id, sire.id, now=later)
    assert uow.genetic_profiles.saves == 2
    assert stale.id == first.id
    assert stale.computed_at == later


async def test_force_refresh_rebuilds(uow, owner_id, breeding_trio):
    sire, _, _ = breeding_trio
    await compute_profile.execute(uow, owner_id, sire.id, now=NOW)
    await compute_profile.execute(uow, owner_id, sire.id, True, now=NOW)
    assert uow.genetic_profiles.saves == 2


async def test_profile_of_adult_breeder(uow, owner_id, breeding_trio):
    _, dam, _ = breeding_trio
    profile = await compute_profile.execute(uow, owner_id, dam.id, now=NOW)

    assert profile.is_breeder
    assert profile.breeding_profile.eligibility == "eligible"
    assert profile.breeding_profile.age_at_maturity_days == 120
    assert profile.inbreeding_coefficient == 0.0
    assert profile.known_close_relatives == []


async def test_young_animal_is_ineligible(uow, owner_id, farm, rabbit_type):
    kit = uow.seed_animal(farm.id, rabbit_type.id, "female", birth_date=date(2025, 5, 1))
    profile = await compute_profile.execute(uow, owner_id, kit.id, now=NOW)
    assert profile.breeding_profile.eligibility == "ineligible"


async def test_profile_records_parents_and_siblings(uow, owner_id, breeding_trio, siblings):
    sire, dam, _ = breeding_trio
    brother, sister = siblings

    profile = await compute_profile.execute(uow, owner_id, brother.id, now=NOW)

    relatives = {r.animal_id: r.relationship for r in profile.known_close_relatives}
    assert relatives == {sire.id: "parent", dam.id: "parent", sister.id: "full_sibling"}
    assert profile.pedigree_generation == 1
    assert {e.relationship for e in profile.pedigree} == {"sire", "dam"}


async def test_shared_litter_of_parents_is_not_inbreeding(
    uow, owner_id, breeding_trio, siblings
):
    sire, dam, _ = breeding_trio
    brother, _ = siblings
    # Both parent profiles now list the litter as their offspring
    await compute_profile.execute(uow, owner_id, sire.id, now=NOW)
    await compute_profile.execute(uow, owner_id, dam.id, now=NOW)

    profile = await compute_profile.execute(uow, owner_id, brother.id, True, now=NOW)

    assert profile.inbreeding_coefficient == 0.0


async def test_parents_with_common_sire_give_inbred_offspring(
    uow, owner_id, farm, rabbit_type
):
    grandsire = uow.seed_animal(farm.id, rabbit_type.id, "male", tag="OLD-1")
    buck = uow.seed_animal(farm.id, rabbit_type.id, "male", tag="BUCK-9", sire_id=grandsire.id)
    doe = uow.seed_animal(farm.id, rabbit_type.id, "female", tag="DOE-9", sire_id=grandsire.id)
    kit = uow.seed_animal(
        farm.id, rabbit_type.id, "female", tag="KIT-9", sire_id=buck.id, dam_id=doe.id
    )
    await compute_profile.execute(uow, owner_id, buck.id, now=NOW)
    await compute_profile.execute(uow, owner_id, doe.id, now=NOW)

    profile = await compute_profile.execute(uow, owner_id, kit.id, now=NOW)

    assert profile.inbreeding_coefficient == pytest.approx(0.5)
    relatives = {r.animal_id: r.relationship for r in profile.known_close_relatives}
    assert relatives[grandsire.id] == "grandparent"


async def test_half_sibling_keeps_its_label(
    uow, owner_id, farm, rabbit_type, breeding_trio, siblings
):
    sire, _, dam_b = breeding_trio
    brother, _ = siblings
    half = uow.seed_animal(
        farm.id, rabbit_type.id, "female", tag="KIT-3", sire_id=sire.id, dam_id=dam_b.id
    )
    await compute_profile.execute(uow, owner_id, sire.id, now=NOW)

    profile = await compute_profile.execute(uow, owner_id, brother.id, now=NOW)

    by_id = {r.animal_id: (r.relationship, r.coefficient) for r in profile.known_close_relatives}
    assert by_id[half.id] == ("half_sibling", 0.25)


async def test_concurrent_requests_share_one_build(uow, breeding_trio):
    sire, _, _ = breeding_trio
    flight: SingleFlight = SingleFlight()

    first, second = await asyncio.gather(
        compute_profile.compute_profile(uow, sire, now=NOW, flight=flight),
        compute_profile.compute_profile(uow, sire, now=NOW, flight=flight),
    )

    assert uow.genetic_profiles.saves == 1
    assert first.id == second.id
    assert sire.id not in flight


async def test_full_siblings_cannot_breed(uow, owner_id, siblings):
    brother, sister = siblings

    report = await check_compatibility.execute(uow, owner_id, brother.id, sister.id, now=NOW)

    assert report.result.can_breed is False
    assert report.result.risk_level == "high"
    assert report.result.relationship.relationship == "full_sibling"
    assert 0 <= report.result.compatibility_score <= 100
    assert report.risk.can_breed is False
    assert report.risk.risks[0].coefficient == 0.5


async def test_unrelated_pair_is_compatible(uow, owner_id, breeding_trio):
    sire, dam, _ = breeding_trio

    report = await check_compatibility.execute(uow, owner_id, sire.id, dam.id, now=NOW)
    risk = await check_compatibility.inbreeding_risk(uow, owner_id, dam.id, sire.id, now=NOW)

    assert report.result.can_breed is True
    assert report.result.risk_level == "low"
    assert report.result.warnings == []
    assert risk.recommendations == ["Low inbreeding risk", "Suitable for breeding"]


async def test_parent_and_child_are_high_risk(uow, owner_id, breeding_trio, siblings):
    sire, _, _ = breeding_trio
    _, sister = siblings

    report = await check_compatibility.execute(uow, owner_id, sire.id, sister.id, now=NOW)

    assert report.result.can_breed is False
    assert report.result.relationship.relationship == "offspring"


async def test_animal_cannot_pair_with_itself(uow, owner_id, breeding_trio):
    sire, _, _ = breeding_trio
    with pytest.raises(ValidationError):
        await check_compatibility.execute(uow, owner_id, sire.id, sire.id, now=NOW)


async def test_compatibility_requires_ownership(uow, breeding_trio):
    sire, dam, _ = breeding_trio
    with pytest.raises(PermissionDenied):
        await check_compatibility.execute(uow, uuid4(), sire.id, dam.id, now=NOW)


async def test_batch_compute_collects_failures(uow, owner_id, farm, breeding_trio, monkeypatch):
    _, _, broken = breeding_trio
    original = uow.animals.list_kin

    async def list_kin(animal):
        if animal.id == broken.id:
            raise RuntimeError("kin lookup failed")
        return await original(animal)

    monkeypatch.setattr(uow.animals, "list_kin", list_kin)

    result = await batch_compute.execute(uow, owner_id, farm.id, now=NOW)

    assert result.total_animals == 3
    assert result.processed == 2
    assert result.failed == 1
    assert result.errors[0].animal_id == broken.id
    assert "kin lookup failed" in result.errors[0].error
    assert uow.savepoints == 3
    assert broken.id not in uow.genetic_profiles.rows


async def test_pair_suggestions_rank_unrelated_pairs(
    uow, owner_id, farm, breeding_trio, siblings
):
    sire, dam_a, dam_b = breeding_trio
    brother, sister = siblings
    await batch_compute.execute(uow, owner_id, farm.id, now=NOW)

    suggestions = await pair_suggestions.execute(
        uow, owner_id, farm.id, min_compatibility=0, limit=10
    )

    pairs = {(s.sire_id, s.dam_id) for s in suggestions}
    assert (brother.id, sister.id) not in pairs
    assert (sire.id, sister.id) not in pairs
    assert (brother.id, dam_a.id) not in pairs
    assert (sire.id, dam_b.id) in pairs
    assert all(0 <= s.compatibility_score <= 100 for s in suggestions)
    scores = [s.compatibility_score for s in suggestions]
    assert scores == sorted(scores, reverse=True)

    with pytest.raises(ValidationError):
        await pair_suggestions.execute(uow, owner_id, farm.id, min_compatibility=101)


async def test_top_breeders_and_dashboard(uow, owner_id, farm, breeding_trio):
    await batch_compute.execute(uow, owner_id, farm.id, now=NOW)

    ranked = await top_breeders.execute(uow, owner_id, farm.id, limit=2)
    assert len(ranked) == 2
    assert all(r.animal is not None for r in ranked)
    assert all(0 <= r.breeding_score <= 100 for r in ranked)

    dashboard = await genetics_dashboard.execute(uow, owner_id, farm.id)
    assert dashboard.total_profiles == 3
    assert dashboard.active_breeders == 3
    assert dashboard.eligible_breeders == 3
    assert dashboard.inbreeding_stats["low_risk"] == 3
    assert dashboard.genetic_diversity_score == 100


async def test_pedigree_tree(uow, owner_id, breeding_trio, siblings):
    sire, dam, _ = breeding_trio
    brother, _ = siblings

    pedigree = await get_pedigree.execute(uow, owner_id, brother.id, depth=2)

    assert pedigree.tree.animal_id == brother.id
    assert pedigree.tree.sire.animal_id == sire.id
    assert pedigree.tree.dam.animal_id == dam.id
    assert pedigree.tree.sire.sire is None
    assert pedigree.generations == 1

    with pytest.raises(ValidationError):
        await get_pedigree.execute(uow, owner_id, brother.id, depth=7)
