from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from breedline.application.interfaces.repositories.genetic_profiles import (
    GeneticProfilesRepository,
)
from breedline.domain.models.genetic_profile import (
    AvoidPair,
    BreedingProfile,
    Eligibility,
    GeneticProfile,
    KnownRelative,
    PedigreeEntry,
    PerformanceMetrics,
    RecommendedPair,
    Traits,
)
from breedline.infrastructure.db.codec import dump, parse_datetime, parse_uuid
from breedline.infrastructure.db.orm.genetic_profile import GeneticProfileORM
from breedline.utils.datetime_tz import as_utc


def _breeding_profile(data: dict[str, Any]) -> BreedingProfile:
    values = dict(data)
    values["last_breeding_date"] = parse_datetime(values.get("last_breeding_date"))
    return BreedingProfile(**values)


def _with_animal(cls, data: dict[str, Any]):
    values = dict(data)
    values["animal_id"] = parse_uuid(values["animal_id"])
    return cls(**values)


class GeneticProfilesSQLAlchemyRepository(GeneticProfilesRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: GeneticProfileORM) -> GeneticProfile:
        return GeneticProfile(
            id=orm.id,
            animal_id=orm.animal_id,
            farm_id=orm.farm_id,
            animal_type_id=orm.animal_type_id,
            gender=orm.gender,
            breeding_profile=_breeding_profile(orm.breeding_profile),
            performance=PerformanceMetrics(**orm.performance_metrics),
            traits=Traits(**orm.traits),
            computed_at=as_utc(orm.computed_at),
            inbreeding_coefficient=orm.inbreeding_coefficient,
            known_close_relatives=[
                _with_animal(KnownRelative, item) for item in orm.known_close_relatives or []
            ],
            recommended_pairs=[
                _with_animal(RecommendedPair, item) for item in orm.recommended_pairs or []
            ],
            avoid_pairs=[_with_animal(AvoidPair, item) for item in orm.avoid_pairs or []],
            pedigree_generation=orm.pedigree_generation,
            pedigree=[_with_animal(PedigreeEntry, item) for item in orm.pedigree or []],
        )

    def _apply(self, orm: GeneticProfileORM, profile: GeneticProfile) -> None:
        orm.farm_id = profile.farm_id
        orm.animal_type_id = profile.animal_type_id
        orm.gender = profile.gender
        orm.is_breeder = profile.breeding_profile.is_breeder
        orm.eligibility = profile.breeding_profile.eligibility
        orm.breeding_profile = dump(profile.breeding_profile)
        orm.performance_metrics = dump(profile.performance)
        orm.traits = dump(profile.traits)
        orm.inbreeding_coefficient = profile.inbreeding_coefficient
        orm.known_close_relatives = dump(profile.known_close_relatives)
        orm.recommended_pairs = dump(profile.recommended_pairs)
        orm.avoid_pairs = dump(profile.avoid_pairs)
        orm.pedigree_generation = profile.pedigree_generation
        orm.pedigree = dump(profile.pedigree)
        orm.computed_at = profile.computed_at

    async def get_by_animal(self, animal_id: UUID) -> GeneticProfile | None:
        stmt = select(GeneticProfileORM).where(GeneticProfileORM.animal_id == animal_id)
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def save(self, profile: GeneticProfile) -> GeneticProfile:
        stmt = select(GeneticProfileORM).where(GeneticProfileORM.animal_id == profile.animal_id)
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        if orm is None:
            orm = GeneticProfileORM(id=profile.id, animal_id=profile.animal_id)
            self.session.add(orm)
        self._apply(orm, profile)
        await self.session.flush()
        return self._to_domain(orm)

    async def list_by_farm(
        self, farm_id: UUID, eligible_breeders_only: bool = False
    ) -> list[GeneticProfile]:
        stmt = select(GeneticProfileORM).where(GeneticProfileORM.farm_id == farm_id)
        if eligible_breeders_only:
            stmt = stmt.where(GeneticProfileORM.is_breeder.is_(True)).where(
                GeneticProfileORM.eligibility == Eligibility.ELIGIBLE.value
            )
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]
