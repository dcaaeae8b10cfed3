"""Per-animal breeding analytics: breeder status, eligibility, metrics and traits.

Everything here is a pure function over already-loaded records so the engine can
be exercised without a database.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from datetime import datetime

from breedline.domain.models.animal import (
    Animal,
    BreedingStatus,
    Gender,
    HealthStatus,
    ReproductiveStatus,
)
from breedline.domain.models.birth_event import BirthEvent
from breedline.domain.models.genetic_profile import (
    BreedingProfile,
    Eligibility,
    GeneticProfile,
    PerformanceMetrics,
    Traits,
)
from breedline.domain.models.mating_event import MatingEvent
from breedline.domain.models.pregnancy import Pregnancy, PregnancyStatus
from breedline.domain.value_objects.capabilities import Capabilities

BREEDER_FEMALE_STATUSES = (None, ReproductiveStatus.OPEN.value, ReproductiveStatus.DRY.value)
BREEDER_MALE_STATUSES = (None, BreedingStatus.ACTIVE.value)
RESTRICTED_HEALTH = (HealthStatus.POOR.value, HealthStatus.CRITICAL.value)

TRAIT_MIN = 1
TRAIT_MAX = 10
TRAIT_DEFAULT = 5


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def clamp_trait(value: float) -> int:
    return max(TRAIT_MIN, min(TRAIT_MAX, round_half_up(value)))


def is_breeder(animal: Animal, caps: Capabilities) -> bool:
    if animal.gender not in (Gender.MALE.value, Gender.FEMALE.value):
        return False
    if not caps.genetics_enabled:
        return False
    if not animal.is_alive or not animal.is_active:
        return False
    if animal.is_female:
        return animal.reproductive_status in BREEDER_FEMALE_STATUSES
    return animal.breeding_status in BREEDER_MALE_STATUSES


def breeding_eligibility(animal: Animal, caps: Capabilities, now: datetime) -> str:
    if animal.gender == Gender.UNKNOWN.value or not animal.is_alive:
        return Eligibility.INELIGIBLE.value
    age_days = animal.age_in_days(now)
    # No birth date means age is unknown; treat as too young.
    if age_days is None or age_days < caps.genetics.min_breeding_age_days:
        return Eligibility.INELIGIBLE.value
    if animal.health_status in RESTRICTED_HEALTH:
        return Eligibility.RESTRICTED.value
    if animal.is_female and animal.reproductive_status == ReproductiveStatus.INFERTILE.value:
        return Eligibility.INELIGIBLE.value
    if animal.is_male and animal.breeding_status == BreedingStatus.INFERTILE.value:
        return Eligibility.INELIGIBLE.value
    return Eligibility.ELIGIBLE.value


def build_breeding_profile(
    animal: Animal,
    caps: Capabilities,
    matings: Iterable[MatingEvent],
    now: datetime,
) -> BreedingProfile:
    matings = sorted(matings, key=lambda m: m.mating_date)
    first_breeding_age = None
    if matings and animal.birth_date is not None:
        first_breeding_age = (matings[0].mating_date.date() - animal.birth_date).days
    return BreedingProfile(
        is_breeder=is_breeder(animal, caps),
        eligibility=breeding_eligibility(animal, caps, now),
        age_at_maturity_days=caps.genetics.maturity_age_days,
        first_breeding_age_days=first_breeding_age,
        last_breeding_date=matings[-1].mating_date if matings else None,
        season=caps.genetics.breeding_season,
    )


def _rate(part: int, whole: int) -> float:
    if whole <= 0:
        return 0.0
    return round(part / whole * 100, 2)


def compute_performance(
    animal: Animal,
    matings: Iterable[MatingEvent],
    pregnancies: Iterable[Pregnancy],
    births: Iterable[BirthEvent],
) -> PerformanceMetrics:
    """Aggregate reproductive history.

    Males are measured on matings they sired; females on their pregnancies. Both
    use the births they are a parent of for litter and survival figures.
    """
    metrics = PerformanceMetrics()
    births = [b for b in births if b.is_active]

    if animal.is_male:
        matings = [m for m in matings if m.is_active]
        metrics.total_matings = len(matings)
        metrics.successful_matings = sum(1 for m in matings if m.is_successful)
        metrics.mating_success_rate = _rate(metrics.successful_matings, metrics.total_matings)
    elif animal.is_female:
        pregnancies = [p for p in pregnancies if p.is_active]
        delivered = [p for p in pregnancies if p.status == PregnancyStatus.DELIVERED.value]
        metrics.total_pregnancies = len(pregnancies)
        metrics.successful_pregnancies = len(delivered)
        metrics.pregnancy_success_rate = _rate(len(delivered), len(pregnancies))
        gestations = [
            (p.actual_delivery_date - p.conception_date).days
            for p in delivered
            if p.actual_delivery_date is not None
        ]
        if gestations:
            metrics.average_gestation_days = round(sum(gestations) / len(gestations), 2)

    if births:
        metrics.total_offspring = sum(b.total_offspring for b in births)
        metrics.live_offspring = sum(b.live_births for b in births)
        metrics.average_litter_size = round(metrics.total_offspring / len(births), 2)
    metrics.offspring_survival_rate = _rate(metrics.live_offspring, metrics.total_offspring)
    return metrics


def compute_traits(animal: Animal, metrics: PerformanceMetrics, now: datetime) -> Traits:
    traits = Traits()

    age_days = animal.age_in_days(now)
    if animal.weight_kg and age_days:
        traits.growth_rate = clamp_trait(animal.weight_kg / age_days * 100)

    if animal.is_male and metrics.total_matings:
        traits.fertility = clamp_trait(metrics.mating_success_rate / 10)
    elif animal.is_female and metrics.total_pregnancies:
        traits.fertility = clamp_trait(metrics.pregnancy_success_rate / 10)

    if animal.is_female and metrics.average_litter_size > 0:
        traits.litter_size_potential = clamp_trait(min(10, metrics.average_litter_size))

    if metrics.total_offspring:
        traits.offspring_viability = clamp_trait(metrics.offspring_survival_rate / 10)
    return traits


def breeding_score(profile: GeneticProfile) -> int:
    """Weighted 0-100 ranking score used to order a farm's breeders."""
    survival = profile.performance.offspring_survival_rate or 0
    fertility = profile.traits.fertility * 10
    growth = profile.traits.growth_rate * 10
    inbreeding = (1 - profile.inbreeding_coefficient) * 100

    age = profile.breeding_profile.first_breeding_age_days or 365
    age_score = 50.0
    if 365 <= age <= 1825:
        age_score = 100.0
    elif age > 1825:
        age_score = max(0.0, 100 - (age - 1825) / 365 * 10)

    total = survival * 0.3 + fertility * 0.2 + growth * 0.2 + inbreeding * 0.1 + age_score * 0.2
    return round_half_up(total)
