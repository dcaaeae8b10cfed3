from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID

from breedline.application.errors import ValidationError
from breedline.application.interfaces.unit_of_work import UnitOfWork
from breedline.application.use_cases.guards import ensure_farm_access
from breedline.domain.models.animal import Gender
from breedline.domain.services import compatibility


@dataclass(slots=True)
class PairSuggestion:
    sire_id: UUID
    dam_id: UUID
    compatibility_score: int
    warnings: list[str] = field(default_factory=list)
    expected_benefits: list[str] = field(default_factory=list)


async def execute(
    uow: UnitOfWork,
    user_id: UUID,
    farm_id: UUID,
    *,
    min_compatibility: int = 70,
    limit: int = 5,
    animal_type_id: UUID | None = None,
) -> list[PairSuggestion]:
    """Rank male/female pairs among the farm's eligible breeders.

    Works from stored profiles only; pairs that cannot breed are never suggested.
    """
    if not 0 <= min_compatibility <= 100:
        raise ValidationError("min_compatibility must be between 0 and 100")
    if limit < 1:
        raise ValidationError("limit must be positive")
    await ensure_farm_access(uow, farm_id, user_id)

    breeders = await uow.genetic_profiles.list_by_farm(farm_id, eligible_breeders_only=True)
    if animal_type_id is not None:
        breeders = [p for p in breeders if p.animal_type_id == animal_type_id]
    sires = [p for p in breeders if p.gender == Gender.MALE.value]
    dams = [p for p in breeders if p.gender == Gender.FEMALE.value]

    suggestions: list[PairSuggestion] = []
    for sire in sires:
        for dam in dams:
            if sire.animal_type_id != dam.animal_type_id:
                continue
            result = compatibility.can_breed_with(sire, dam)
            if not result.can_breed or result.compatibility_score < min_compatibility:
                continue
            suggestions.append(
                PairSuggestion(
                    sire_id=sire.animal_id,
                    dam_id=dam.animal_id,
                    compatibility_score=result.compatibility_score,
                    warnings=list(result.warnings),
                    expected_benefits=compatibility.expected_benefits(sire, dam),
                )
            )

    suggestions.sort(key=lambda s: s.compatibility_score, reverse=True)
    return suggestions[:limit]
