from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from uuid import UUID, uuid4

DEFAULT_MAX_AGE = timedelta(hours=24)


class Eligibility(str, Enum):
    ELIGIBLE = "eligible"
    RESTRICTED = "restricted"
    INELIGIBLE = "ineligible"


class Relationship(str, Enum):
    PARENT = "parent"
    OFFSPRING = "offspring"
    FULL_SIBLING = "full_sibling"
    HALF_SIBLING = "half_sibling"
    GRANDPARENT = "grandparent"
    GRANDCHILD = "grandchild"
    COUSIN = "cousin"


RELATIONSHIP_COEFFICIENTS = {
    Relationship.PARENT.value: 0.5,
    Relationship.OFFSPRING.value: 0.5,
    Relationship.FULL_SIBLING.value: 0.5,
    Relationship.HALF_SIBLING.value: 0.25,
    Relationship.GRANDPARENT.value: 0.25,
    Relationship.GRANDCHILD.value: 0.25,
    Relationship.COUSIN.value: 0.125,
}


@dataclass(slots=True)
class BreedingProfile:
    is_breeder: bool = False
    eligibility: str = Eligibility.INELIGIBLE.value
    age_at_maturity_days: int | None = None
    first_breeding_age_days: int | None = None
    last_breeding_date: datetime | None = None
    season: str = "year-round"


@dataclass(slots=True)
class PerformanceMetrics:
    total_matings: int = 0
    successful_matings: int = 0
    mating_success_rate: float = 0.0
    total_pregnancies: int = 0
    successful_pregnancies: int = 0
    pregnancy_success_rate: float = 0.0
    total_offspring: int = 0
    live_offspring: int = 0
    offspring_survival_rate: float = 0.0
    average_litter_size: float = 0.0
    average_gestation_days: float = 0.0


@dataclass(slots=True)
class Traits:
    growth_rate: int = 5
    fertility: int = 5
    litter_size_potential: int = 5
    offspring_viability: int = 5


@dataclass(slots=True)
class KnownRelative:
    animal_id: UUID
    relationship: str
    coefficient: float


@dataclass(slots=True)
class RecommendedPair:
    animal_id: UUID
    compatibility_score: int
    expected_benefits: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


@dataclass(slots=True)
class AvoidPair:
    animal_id: UUID
    reason: str
    severity: str


@dataclass(slots=True)
class PedigreeEntry:
    animal_id: UUID
    generation: int
    relationship: str


@dataclass(slots=True)
class GeneticProfile:
    id: UUID
    animal_id: UUID
    farm_id: UUID
    animal_type_id: UUID
    gender: str
    breeding_profile: BreedingProfile
    performance: PerformanceMetrics
    traits: Traits
    computed_at: datetime
    inbreeding_coefficient: float = 0.0
    known_close_relatives: list[KnownRelative] = field(default_factory=list)
    recommended_pairs: list[RecommendedPair] = field(default_factory=list)
    avoid_pairs: list[AvoidPair] = field(default_factory=list)
    pedigree_generation: int = 0
    pedigree: list[PedigreeEntry] = field(default_factory=list)

    @classmethod
    def create(
        cls,
        animal_id: UUID,
        farm_id: UUID,
        animal_type_id: UUID,
        gender: str,
        breeding_profile: BreedingProfile,
        performance: PerformanceMetrics,
        traits: Traits,
        computed_at: datetime | None = None,
    ) -> GeneticProfile:
        return cls(
            id=uuid4(),
            animal_id=animal_id,
            farm_id=farm_id,
            animal_type_id=animal_type_id,
            gender=gender,
            breeding_profile=breeding_profile,
            performance=performance,
            traits=traits,
            computed_at=computed_at or datetime.now(timezone.utc),
        )

    @property
    def is_breeder(self) -> bool:
        return self.breeding_profile.is_breeder

    @property
    def is_eligible(self) -> bool:
        return self.breeding_profile.eligibility == Eligibility.ELIGIBLE.value

    def relative(self, animal_id: UUID) -> KnownRelative | None:
        for relative in self.known_close_relatives:
            if relative.animal_id == animal_id:
                return relative
        return None


def is_stale(
    profile: GeneticProfile, now: datetime, max_age: timedelta = DEFAULT_MAX_AGE
) -> bool:
    """A profile computed at or before `now - max_age` must be rebuilt."""
    return now - profile.computed_at >= max_age
