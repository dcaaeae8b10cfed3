from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class BreedingProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    is_breeder: bool
    eligibility: str
    age_at_maturity_days: int | None
    first_breeding_age_days: int | None
    last_breeding_date: datetime | None
    season: str


class PerformanceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_matings: int
    successful_matings: int
    mating_success_rate: float
    total_pregnancies: int
    successful_pregnancies: int
    pregnancy_success_rate: float
    total_offspring: int
    live_offspring: int
    offspring_survival_rate: float
    average_litter_size: float
    average_gestation_days: float


class TraitsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    growth_rate: int
    fertility: int
    litter_size_potential: int
    offspring_viability: int


class RelativeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    animal_id: UUID
    relationship: str
    coefficient: float


class RecommendedPairResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    animal_id: UUID
    compatibility_score: int
    expected_benefits: list[str]
    warnings: list[str]


class AvoidPairResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    animal_id: UUID
    reason: str
    severity: str


class PedigreeEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    animal_id: UUID
    generation: int
    relationship: str


class GeneticProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    animal_id: UUID
    farm_id: UUID
    animal_type_id: UUID
    gender: str
    breeding_profile: BreedingProfileResponse
    performance: PerformanceResponse
    traits: TraitsResponse
    inbreeding_coefficient: float
    known_close_relatives: list[RelativeResponse]
    recommended_pairs: list[RecommendedPairResponse]
    avoid_pairs: list[AvoidPairResponse]
    pedigree_generation: int
    pedigree: list[PedigreeEntryResponse]
    computed_at: datetime


class PedigreeNodeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    animal_id: UUID
    tag: str
    name: str | None
    gender: str
    breed: str | None
    birth_date: date | None
    sire: PedigreeNodeResponse | None = None
    dam: PedigreeNodeResponse | None = None


class PedigreeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    animal_id: UUID
    depth: int
    generations: int
    tree: PedigreeNodeResponse | None
    ancestors: list[PedigreeEntryResponse]


class CompatibilityResultResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    can_breed: bool
    risk_level: str
    compatibility_score: int
    relationship: RelativeResponse | None
    warnings: list[str]


class RelationshipRiskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    relationship: str
    coefficient: float
    description: str


class InbreedingRiskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    can_breed: bool
    risk_level: str
    combined_inbreeding_coefficient: float
    risks: list[RelationshipRiskResponse]
    recommendations: list[str]


class CompatibilityResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    animal_id: UUID
    partner_id: UUID
    result: CompatibilityResultResponse
    risk: InbreedingRiskResponse


class PairSuggestionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    sire_id: UUID
    dam_id: UUID
    compatibility_score: int
    warnings: list[str]
    expected_benefits: list[str]


class BatchErrorResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    animal_id: UUID
    error: str


class BatchComputeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_animals: int
    processed: int
    failed: int
    errors: list[BatchErrorResponse]


class BreederAnimalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    tag: str
    name: str | None
    gender: str
    breed: str | None
    birth_date: date | None
    status: str


class RankedBreederResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    animal: BreederAnimalResponse | None
    profile: GeneticProfileResponse
    breeding_score: int


class GeneticsDashboardResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_profiles: int
    active_breeders: int
    eligible_breeders: int
    trait_averages: dict[str, float]
    inbreeding_stats: dict[str, int]
    performance_averages: dict[str, float]
    recent_recommendations: list[GeneticProfileResponse]
    genetic_diversity_score: int
    breeding_program_strength: int
