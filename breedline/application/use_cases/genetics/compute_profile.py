"""Genetic profile engine.

A profile is a derived cache: it is rebuilt from the animal, its reproductive
history and its relatives whenever it is missing, stale, or a refresh is forced.
The build runs as a sequence of passes, each one a pure domain function fed with
records loaded here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from uuid import UUID

from breedline.application.interfaces.unit_of_work import UnitOfWork
from breedline.application.use_cases.guards import (
    capabilities_for,
    load_animal,
    load_owned_animal,
    utcnow,
)
from breedline.domain.models.animal import Animal, AnimalStatus, Gender
from breedline.domain.models.genetic_profile import (
    DEFAULT_MAX_AGE,
    AvoidPair,
    GeneticProfile,
    RecommendedPair,
    is_stale,
)
from breedline.domain.services import breeding, compatibility, lineage
from breedline.utils.single_flight import SingleFlight

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ProfileOptions:
    max_age: timedelta = DEFAULT_MAX_AGE
    pedigree_max_depth: int = 3
    pedigree_max_ancestors: int = 50
    recommendation_limit: int = 10


DEFAULT_OPTIONS = ProfileOptions()


async def _relatives_of(uow: UnitOfWork, animal_id: UUID | None):
    if animal_id is None:
        return None
    profile = await uow.genetic_profiles.get_by_animal(animal_id)
    return profile.known_close_relatives if profile else None


async def _fill_relatives(uow: UnitOfWork, profile: GeneticProfile, animal: Animal) -> None:
    # Parents contribute the relatives recorded in their own cached profiles;
    # they are not recomputed here, which keeps the pass non-recursive.
    parent_relatives = {}
    for parent_id in (animal.sire_id, animal.dam_id):
        relatives = await _relatives_of(uow, parent_id)
        if relatives:
            parent_relatives[parent_id] = relatives

    kin = await uow.animals.list_kin(animal)
    offspring = await uow.animals.list_offspring(animal.id)
    profile.known_close_relatives = lineage.collect_relatives(
        animal, parent_relatives, kin, offspring
    )

    sire_relatives = parent_relatives.get(animal.sire_id) if animal.sire_id else None
    dam_relatives = parent_relatives.get(animal.dam_id) if animal.dam_id else None
    if sire_relatives and dam_relatives:
        profile.inbreeding_coefficient = lineage.inbreeding_coefficient(
            sire_relatives, dam_relatives
        )


async def _fill_pedigree(
    uow: UnitOfWork, profile: GeneticProfile, animal: Animal, options: ProfileOptions
) -> None:
    async def fetch_parents(animal_id: UUID):
        if animal_id == animal.id:
            return animal.sire_id, animal.dam_id
        node = await uow.animals.get(animal_id)
        return (node.sire_id, node.dam_id) if node else None

    generation, ancestors = await lineage.trace_pedigree(
        animal.id,
        fetch_parents,
        max_depth=options.pedigree_max_depth,
        max_entries=options.pedigree_max_ancestors,
    )
    profile.pedigree_generation = generation
    profile.pedigree = ancestors


async def _fill_recommendations(
    uow: UnitOfWork, profile: GeneticProfile, animal: Animal, options: ProfileOptions
) -> None:
    profile.recommended_pairs = []
    profile.avoid_pairs = []
    if not profile.is_breeder or not profile.is_eligible:
        return

    partner_gender = Gender.FEMALE.value if animal.is_male else Gender.MALE.value
    partners = await uow.animals.list_by_farm(
        animal.farm_id,
        gender=partner_gender,
        animal_type_id=animal.animal_type_id,
        status=AnimalStatus.ALIVE.value,
    )
    recommended: list[RecommendedPair] = []
    avoid: list[AvoidPair] = []
    for partner in partners:
        if partner.id == animal.id:
            continue
        partner_profile = await uow.genetic_profiles.get_by_animal(partner.id)
        if partner_profile is None or not partner_profile.is_breeder:
            continue
        result = compatibility.can_breed_with(profile, partner_profile)
        if result.can_breed:
            recommended.append(
                RecommendedPair(
                    animal_id=partner.id,
                    compatibility_score=result.compatibility_score,
                    expected_benefits=compatibility.expected_benefits(profile, partner_profile),
                    warnings=list(result.warnings),
                )
            )
        else:
            avoid.append(
                AvoidPair(
                    animal_id=partner.id,
                    reason=", ".join(result.warnings),
                    severity=compatibility.avoid_severity(result),
                )
            )

    recommended.sort(key=lambda pair: pair.compatibility_score, reverse=True)
    avoid.sort(key=lambda pair: pair.severity != "high")
    profile.recommended_pairs = recommended[: options.recommendation_limit]
    profile.avoid_pairs = avoid[: options.recommendation_limit]


async def build_profile(
    uow: UnitOfWork,
    animal: Animal,
    *,
    options: ProfileOptions = DEFAULT_OPTIONS,
    now: datetime | None = None,
    existing: GeneticProfile | None = None,
) -> GeneticProfile:
    now = now or utcnow()
    caps = await capabilities_for(uow, animal)

    matings = await uow.mating_events.list_for_animal(animal.id)
    pregnancies = await uow.pregnancies.list_for_parent(animal.id)
    births = await uow.birth_events.list_for_parent(animal.id)

    breeding_profile = breeding.build_breeding_profile(animal, caps, matings, now)
    performance = breeding.compute_performance(animal, matings, pregnancies, births)
    traits = breeding.compute_traits(animal, performance, now)

    profile = GeneticProfile.create(
        animal_id=animal.id,
        farm_id=animal.farm_id,
        animal_type_id=animal.animal_type_id,
        gender=animal.gender,
        breeding_profile=breeding_profile,
        performance=performance,
        traits=traits,
        computed_at=now,
    )
    if existing is not None:
        profile.id = existing.id

    await _fill_relatives(uow, profile, animal)
    await _fill_pedigree(uow, profile, animal, options)
    await _fill_recommendations(uow, profile, animal, options)
    return profile


async def compute_profile(
    uow: UnitOfWork,
    animal: Animal,
    force_refresh: bool = False,
    *,
    options: ProfileOptions = DEFAULT_OPTIONS,
    now: datetime | None = None,
    flight: SingleFlight[GeneticProfile] | None = None,
) -> GeneticProfile:
    """Return the cached profile of `animal` or rebuild and store it."""
    now = now or utcnow()
    existing = await uow.genetic_profiles.get_by_animal(animal.id)
    if existing is not None and not force_refresh and not is_stale(
        existing, now, options.max_age
    ):
        return existing

    async def rebuild() -> GeneticProfile:
        profile = await build_profile(uow, animal, options=options, now=now, existing=existing)
        saved = await uow.genetic_profiles.save(profile)
        logger.info(
            "Computed genetic profile for animal %s (breeder=%s, eligibility=%s)",
            animal.id,
            saved.is_breeder,
            saved.breeding_profile.eligibility,
        )
        return saved

    if flight is None:
        return await rebuild()
    return await flight.run(animal.id, rebuild)


async def execute(
    uow: UnitOfWork,
    user_id: UUID,
    animal_id: UUID,
    force_refresh: bool = False,
    *,
    options: ProfileOptions = DEFAULT_OPTIONS,
    now: datetime | None = None,
    flight: SingleFlight[GeneticProfile] | None = None,
) -> GeneticProfile:
    animal = await load_owned_animal(uow, user_id, animal_id)
    return await compute_profile(
        uow, animal, force_refresh, options=options, now=now, flight=flight
    )


async def profile_for(
    uow: UnitOfWork,
    animal_id: UUID,
    *,
    options: ProfileOptions = DEFAULT_OPTIONS,
    now: datetime | None = None,
    flight: SingleFlight[GeneticProfile] | None = None,
) -> GeneticProfile:
    animal = await load_animal(uow, animal_id)
    return await compute_profile(uow, animal, options=options, now=now, flight=flight)
