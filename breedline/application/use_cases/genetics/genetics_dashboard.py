from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID

from breedline.application.interfaces.unit_of_work import UnitOfWork
from breedline.application.use_cases.guards import ensure_farm_access
from breedline.domain.models.genetic_profile import GeneticProfile
from breedline.domain.services.breeding import breeding_score

LOW_INBREEDING = 0.1
HIGH_INBREEDING = 0.3
RECENT_RECOMMENDATIONS = 5


@dataclass(slots=True)
class GeneticsDashboard:
    total_profiles: int
    active_breeders: int
    eligible_breeders: int
    trait_averages: dict[str, float] = field(default_factory=dict)
    inbreeding_stats: dict[str, int] = field(default_factory=dict)
    performance_averages: dict[str, float] = field(default_factory=dict)
    recent_recommendations: list[GeneticProfile] = field(default_factory=list)
    genetic_diversity_score: int = 0
    breeding_program_strength: int = 0


def _mean(values: list[float]) -> float:
    return round(sum(values) / len(values), 2) if values else 0.0


def inbreeding_band(coefficient: float) -> str:
    if coefficient < LOW_INBREEDING:
        return "low_risk"
    if coefficient <= HIGH_INBREEDING:
        return "medium_risk"
    return "high_risk"


async def execute(uow: UnitOfWork, user_id: UUID, farm_id: UUID) -> GeneticsDashboard:
    await ensure_farm_access(uow, farm_id, user_id)
    profiles = await uow.genetic_profiles.list_by_farm(farm_id)
    breeders = [p for p in profiles if p.is_breeder]
    eligible = [p for p in breeders if p.is_eligible]

    bands = {"low_risk": 0, "medium_risk": 0, "high_risk": 0}
    for profile in profiles:
        bands[inbreeding_band(profile.inbreeding_coefficient)] += 1

    recent = sorted(breeders, key=lambda p: p.computed_at, reverse=True)
    diversity = 100 * (1 - _mean([p.inbreeding_coefficient for p in profiles])) if profiles else 0

    return GeneticsDashboard(
        total_profiles=len(profiles),
        active_breeders=len(breeders),
        eligible_breeders=len(eligible),
        trait_averages={
            "growth_rate": _mean([p.traits.growth_rate for p in profiles]),
            "fertility": _mean([p.traits.fertility for p in profiles]),
            "offspring_viability": _mean([p.traits.offspring_viability for p in profiles]),
        },
        inbreeding_stats=bands,
        performance_averages={
            "offspring_survival_rate": _mean(
                [p.performance.offspring_survival_rate for p in breeders]
            ),
            "mating_success_rate": _mean([p.performance.mating_success_rate for p in breeders]),
            "pregnancy_success_rate": _mean(
                [p.performance.pregnancy_success_rate for p in breeders]
            ),
        },
        recent_recommendations=recent[:RECENT_RECOMMENDATIONS],
        genetic_diversity_score=round(diversity),
        breeding_program_strength=round(_mean([breeding_score(p) for p in eligible])),
    )
