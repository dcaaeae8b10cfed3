"""Pairwise checks between two animals: breeding compatibility and inbreeding risk."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from breedline.application.errors import ValidationError
from breedline.application.interfaces.unit_of_work import UnitOfWork
from breedline.application.use_cases.genetics.compute_profile import (
    DEFAULT_OPTIONS,
    ProfileOptions,
    compute_profile,
)
from breedline.application.use_cases.guards import load_owned_animal
from breedline.domain.models.genetic_profile import GeneticProfile
from breedline.domain.services import compatibility
from breedline.utils.single_flight import SingleFlight


@dataclass(slots=True)
class RelationshipRisk:
    relationship: str
    coefficient: float
    description: str


@dataclass(slots=True)
class InbreedingRiskReport:
    can_breed: bool
    risk_level: str
    combined_inbreeding_coefficient: float
    risks: list[RelationshipRisk] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)


@dataclass(slots=True)
class CompatibilityReport:
    animal_id: UUID
    partner_id: UUID
    result: compatibility.CompatibilityResult
    risk: InbreedingRiskReport


def assess_inbreeding_risk(a: GeneticProfile, b: GeneticProfile) -> InbreedingRiskReport:
    relative = compatibility.find_relationship(a, b)
    level = compatibility.risk_level(relative.relationship if relative else None)
    risks = []
    if relative is not None:
        risks.append(
            RelationshipRisk(
                relationship=relative.relationship,
                coefficient=relative.coefficient,
                description=compatibility.describe_relationship(relative.relationship),
            )
        )
    combined = (a.inbreeding_coefficient + b.inbreeding_coefficient) / 2
    return InbreedingRiskReport(
        can_breed=level != compatibility.RiskLevel.HIGH.value,
        risk_level=level,
        combined_inbreeding_coefficient=combined,
        risks=risks,
        recommendations=compatibility.risk_recommendations(level, combined),
    )


async def _profiles(
    uow: UnitOfWork,
    user_id: UUID,
    animal_id: UUID,
    partner_id: UUID,
    options: ProfileOptions,
    flight: SingleFlight[GeneticProfile] | None,
    now: datetime | None,
) -> tuple[GeneticProfile, GeneticProfile]:
    if animal_id == partner_id:
        raise ValidationError("An animal cannot be paired with itself")
    animal = await load_owned_animal(uow, user_id, animal_id)
    partner = await load_owned_animal(uow, user_id, partner_id)
    first = await compute_profile(uow, animal, options=options, now=now, flight=flight)
    second = await compute_profile(uow, partner, options=options, now=now, flight=flight)
    return first, second


async def execute(
    uow: UnitOfWork,
    user_id: UUID,
    animal_id: UUID,
    partner_id: UUID,
    *,
    options: ProfileOptions = DEFAULT_OPTIONS,
    flight: SingleFlight[GeneticProfile] | None = None,
    now: datetime | None = None,
) -> CompatibilityReport:
    first, second = await _profiles(uow, user_id, animal_id, partner_id, options, flight, now)
    return CompatibilityReport(
        animal_id=animal_id,
        partner_id=partner_id,
        result=compatibility.can_breed_with(first, second),
        risk=assess_inbreeding_risk(first, second),
    )


async def inbreeding_risk(
    uow: UnitOfWork,
    user_id: UUID,
    animal_id: UUID,
    partner_id: UUID,
    *,
    options: ProfileOptions = DEFAULT_OPTIONS,
    flight: SingleFlight[GeneticProfile] | None = None,
    now: datetime | None = None,
) -> InbreedingRiskReport:
    first, second = await _profiles(uow, user_id, animal_id, partner_id, options, flight, now)
    return assess_inbreeding_risk(first, second)
