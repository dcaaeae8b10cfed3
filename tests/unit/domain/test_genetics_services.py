from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from uuid import uuid4

import pytest
from hypothesis import given
from hypothesis import strategies as st

from breedline.domain.models.animal import Animal
from breedline.domain.models.animal_type import AnimalType, GeneticsSettings
from breedline.domain.models.genetic_profile import (
    BreedingProfile,
    GeneticProfile,
    KnownRelative,
    PerformanceMetrics,
    Traits,
    is_stale,
)
from breedline.domain.services import breeding, compatibility, lineage, tagging
from breedline.domain.value_objects.capabilities import Capabilities

NOW = datetime(2025, 6, 1, tzinfo=timezone.utc)
TYPE_ID = uuid4()


def animal(gender: str, **kwargs) -> Animal:
    kwargs.setdefault("birth_date", date(2023, 1, 1))
    tag = f"A-{uuid4().hex[:4]}"
    return Animal.create(
        farm_id=uuid4(), animal_type_id=TYPE_ID, tag=tag, gender=gender, **kwargs
    )


def profile(
    relatives=(), inbreeding=0.0, growth=5, survival=0.0, breeder=True
) -> GeneticProfile:
    result = GeneticProfile.create(
        animal_id=uuid4(),
        farm_id=uuid4(),
        animal_type_id=TYPE_ID,
        gender="female",
        breeding_profile=BreedingProfile(is_breeder=breeder, eligibility="eligible"),
        performance=PerformanceMetrics(offspring_survival_rate=survival),
        traits=Traits(growth_rate=growth),
        computed_at=NOW,
    )
    result.inbreeding_coefficient = inbreeding
    result.known_close_relatives = list(relatives)
    return result


def caps(enabled: bool = True) -> Capabilities:
    return Capabilities.of(
        AnimalType(
            id=TYPE_ID,
            name="Rabbit",
            genetics=GeneticsSettings(enable_genetics=enabled, min_breeding_age_days=150),
        )
    )


@pytest.mark.parametrize(
    "name, code",
    [
        ("Rabbit", "RAB"),
        ("Dairy Cow", "COW"),
        ("chickens", "CHK"),
        ("Llama", "LLA"),
        ("", "UNK"),
    ],
)
def test_species_code(name, code):
    assert tagging.species_code(name) == code


def test_tag_format_and_pattern():
    born = date(2025, 3, 4)
    assert tagging.format_tag("RAB", born, 7) == "RAB25007"
    pattern = tagging.tag_pattern("RAB", born)
    assert pattern.match("RAB25123")
    assert not pattern.match("RAB2512")
    assert not pattern.match("RAB24123")


def test_capabilities_prefer_reproduction_gestation():
    animal_type = AnimalType(
        id=TYPE_ID,
        name="Goat",
        gestation_days=150,
        genetics=GeneticsSettings(gestation_period_days=148),
    )
    assert Capabilities.of(animal_type).gestation_days == 150
    animal_type.gestation_days = None
    assert Capabilities.of(animal_type).gestation_days == 148
    assert Capabilities.of(None).reproduction_enabled is False


def test_collect_relatives_labels_family():
    sire, dam = uuid4(), uuid4()
    subject = animal("male", sire_id=sire, dam_id=dam)
    full = animal("female", sire_id=sire, dam_id=dam)
    half = animal("female", sire_id=sire, dam_id=uuid4())
    child = animal("female", sire_id=subject.id)
    grandsire = uuid4()
    parent_relatives = {sire: [KnownRelative(grandsire, "parent", 0.5)]}

    relatives = lineage.collect_relatives(subject, parent_relatives, [full, half], [child])

    by_id = {r.animal_id: (r.relationship, r.coefficient) for r in relatives}
    assert by_id == {
        sire: ("parent", 0.5),
        dam: ("parent", 0.5),
        grandsire: ("grandparent", 0.25),
        full.id: ("full_sibling", 0.5),
        half.id: ("half_sibling", 0.25),
        child.id: ("offspring", 0.5),
    }


def test_collect_relatives_keeps_closest_relationship():
    sire, dam = uuid4(), uuid4()
    subject = animal("male", sire_id=sire, dam_id=dam)
    # The dam also shows up as a relative of the sire
    parent_relatives = {sire: [KnownRelative(dam, "half_sibling", 0.25)]}

    relatives = lineage.collect_relatives(subject, parent_relatives, [], [])

    assert {r.animal_id: r.relationship for r in relatives}[dam] == "parent"


def test_inbreeding_coefficient_of_shared_relatives():
    shared = uuid4()
    sire_side = [KnownRelative(shared, "parent", 0.5), KnownRelative(uuid4(), "parent", 0.5)]
    dam_side = [KnownRelative(shared, "grandparent", 0.25)]
    assert lineage.inbreeding_coefficient(sire_side, dam_side) == pytest.approx(0.375)
    assert lineage.inbreeding_coefficient(sire_side, []) == 0.0


def test_inbreeding_coefficient_ignores_descendants_and_siblings():
    child, sibling = uuid4(), uuid4()
    shared = [KnownRelative(child, "offspring", 0.5), KnownRelative(sibling, "half_sibling", 0.25)]
    assert lineage.inbreeding_coefficient(shared, list(shared)) == 0.0


def test_collect_relatives_carries_over_only_grandparents():
    sire, dam = uuid4(), uuid4()
    subject = animal("male", sire_id=sire, dam_id=dam)
    half = animal("female", sire_id=sire, dam_id=uuid4())
    grandsire = uuid4()
    # The sire's profile lists its own sire, its other kit and a sibling of its own
    parent_relatives = {
        sire: [
            KnownRelative(grandsire, "parent", 0.5),
            KnownRelative(half.id, "offspring", 0.5),
            KnownRelative(uuid4(), "full_sibling", 0.5),
        ]
    }

    relatives = lineage.collect_relatives(subject, parent_relatives, [half], [])

    by_id = {r.animal_id: (r.relationship, r.coefficient) for r in relatives}
    assert by_id == {
        sire: ("parent", 0.5),
        dam: ("parent", 0.5),
        grandsire: ("grandparent", 0.25),
        half.id: ("half_sibling", 0.25),
    }


async def test_trace_pedigree_bounds_depth_and_cycles():
    a, b, c, d = uuid4(), uuid4(), uuid4(), uuid4()
    # d is recorded as its own great-grandparent
    links = {a: (b, c), b: (d, None), c: (None, None), d: (a, b)}

    async def fetch(node_id):
        return links.get(node_id)

    generation, entries = await lineage.trace_pedigree(a, fetch, max_depth=3)
    labels = [(e.animal_id, e.relationship) for e in entries]
    assert (b, "sire") in labels
    assert (c, "dam") in labels
    assert (d, "grandsire") in labels
    assert all(e.animal_id != a for e in entries)
    assert generation <= 3

    _, limited = await lineage.trace_pedigree(a, fetch, max_depth=3, max_entries=1)
    assert len(limited) == 1


def test_ancestor_labels():
    assert lineage.ancestor_label("dam", 1) == "dam"
    assert lineage.ancestor_label("dam", 2) == "granddam"
    assert lineage.ancestor_label("sire", 4) == "great_great_grandsire"


def test_full_siblings_cannot_breed():
    other = profile()
    subject = profile(relatives=[KnownRelative(other.animal_id, "full_sibling", 0.5)])

    result = compatibility.can_breed_with(subject, other)

    assert result.can_breed is False
    assert result.risk_level == "high"
    assert compatibility.avoid_severity(result) == "high"


def test_relationship_is_inverted_from_partner_side():
    parent = profile()
    child = profile(relatives=[KnownRelative(parent.animal_id, "parent", 0.5)])

    found = compatibility.find_relationship(parent, child)

    assert found.animal_id == child.animal_id
    assert found.relationship == "offspring"


def test_half_siblings_breed_with_warning():
    other = profile()
    subject = profile(relatives=[KnownRelative(other.animal_id, "half_sibling", 0.25)])

    result = compatibility.can_breed_with(subject, other)

    assert result.can_breed is True
    assert result.risk_level == "medium"
    assert result.warnings == ["Medium inbreeding risk: half_sibling"]


def test_non_breeder_cannot_breed():
    result = compatibility.can_breed_with(profile(), profile(breeder=False))
    assert result.can_breed is False
    assert compatibility.NOT_BREEDERS_WARNING in result.warnings


@given(
    inbreeding_a=st.floats(min_value=0, max_value=1),
    inbreeding_b=st.floats(min_value=0, max_value=1),
    growth_a=st.integers(min_value=1, max_value=10),
    growth_b=st.integers(min_value=1, max_value=10),
    survival=st.floats(min_value=0, max_value=100),
)
def test_compatibility_score_is_bounded(
    inbreeding_a, inbreeding_b, growth_a, growth_b, survival
):
    a = profile(inbreeding=inbreeding_a, growth=growth_a, survival=survival)
    b = profile(inbreeding=inbreeding_b, growth=growth_b, survival=survival)
    assert 0 <= compatibility.compatibility_score(a, b) <= 100


def test_compatibility_score_of_even_pair():
    assert compatibility.compatibility_score(profile(), profile()) == 70
    assert compatibility.compatibility_score(profile(survival=100), profile(survival=100)) == 100


def test_breeder_and_eligibility_rules():
    adult = animal("female")
    assert breeding.is_breeder(adult, caps())
    assert not breeding.is_breeder(adult, caps(enabled=False))
    assert breeding.breeding_eligibility(adult, caps(), NOW) == "eligible"

    young = animal("female", birth_date=date(2025, 5, 1))
    assert breeding.breeding_eligibility(young, caps(), NOW) == "ineligible"

    sick = animal("male", health_status="poor")
    assert breeding.breeding_eligibility(sick, caps(), NOW) == "restricted"

    pregnant = animal("female", reproductive_status="pregnant")
    assert not breeding.is_breeder(pregnant, caps())

    undated = animal("male", birth_date=None)
    assert breeding.breeding_eligibility(undated, caps(), NOW) == "ineligible"


def test_traits_are_clamped():
    assert breeding.clamp_trait(0.2) == 1
    assert breeding.clamp_trait(5.5) == 6
    assert breeding.clamp_trait(42) == 10


def test_breeding_score_weights():
    subject = profile(survival=100)
    subject.breeding_profile.first_breeding_age_days = 400
    subject.traits.fertility = 10
    subject.traits.growth_rate = 10
    assert breeding.breeding_score(subject) == 100

    subject.breeding_profile.first_breeding_age_days = None
    # Unknown first breeding age counts as 365 days
    assert breeding.breeding_score(subject) == 100


@pytest.mark.parametrize("hours, stale", [(1, False), (23, False), (24, True), (48, True)])
def test_profile_staleness(hours, stale):
    assert is_stale(profile(), NOW + timedelta(hours=hours)) is stale
