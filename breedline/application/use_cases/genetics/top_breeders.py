from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from breedline.application.errors import ValidationError
from breedline.application.interfaces.unit_of_work import UnitOfWork
from breedline.application.use_cases.guards import ensure_farm_access
from breedline.domain.models.animal import Animal
from breedline.domain.models.genetic_profile import GeneticProfile
from breedline.domain.services.breeding import breeding_score


@dataclass(slots=True)
class RankedBreeder:
    animal: Animal | None
    profile: GeneticProfile
    breeding_score: int


async def execute(
    uow: UnitOfWork, user_id: UUID, farm_id: UUID, limit: int = 10
) -> list[RankedBreeder]:
    if limit < 1:
        raise ValidationError("limit must be positive")
    await ensure_farm_access(uow, farm_id, user_id)
    profiles = await uow.genetic_profiles.list_by_farm(farm_id, eligible_breeders_only=True)
    profiles.sort(key=lambda p: p.performance.offspring_survival_rate, reverse=True)

    ranked = []
    for profile in profiles[:limit]:
        ranked.append(
            RankedBreeder(
                animal=await uow.animals.get(profile.animal_id),
                profile=profile,
                breeding_score=breeding_score(profile),
            )
        )
    return ranked
