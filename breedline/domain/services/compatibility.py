from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from breedline.domain.models.genetic_profile import GeneticProfile, KnownRelative, Relationship
from breedline.domain.services.breeding import round_half_up


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


HIGH_RISK = frozenset(
    {Relationship.PARENT.value, Relationship.OFFSPRING.value, Relationship.FULL_SIBLING.value}
)
MEDIUM_RISK = frozenset(
    {Relationship.HALF_SIBLING.value, Relationship.GRANDPARENT.value, Relationship.GRANDCHILD.value}
)

_INVERSE = {
    Relationship.PARENT.value: Relationship.OFFSPRING.value,
    Relationship.OFFSPRING.value: Relationship.PARENT.value,
    Relationship.GRANDPARENT.value: Relationship.GRANDCHILD.value,
    Relationship.GRANDCHILD.value: Relationship.GRANDPARENT.value,
}

_DESCRIPTIONS = {
    Relationship.PARENT.value: "Parent-Offspring relationship (high risk)",
    Relationship.OFFSPRING.value: "Offspring-Parent relationship (high risk)",
    Relationship.FULL_SIBLING.value: "Full siblings (high risk)",
    Relationship.HALF_SIBLING.value: "Half siblings (medium risk)",
    Relationship.GRANDPARENT.value: "Grandparent-Grandchild (medium risk)",
    Relationship.GRANDCHILD.value: "Grandchild-Grandparent (medium risk)",
    Relationship.COUSIN.value: "Cousins (low risk)",
}

NOT_BREEDERS_WARNING = "One or both animals are not designated as breeders"


@dataclass(frozen=True, slots=True)
class CompatibilityResult:
    can_breed: bool
    risk_level: str
    compatibility_score: int
    relationship: KnownRelative | None = None
    warnings: list[str] = field(default_factory=list)


def find_relationship(a: GeneticProfile, b: GeneticProfile) -> KnownRelative | None:
    """Relationship of `b` as seen from `a`.

    A's own relatives are authoritative; B's list is consulted as a fallback
    and its relationship inverted (B lists A as parent -> A sees B as offspring).
    """
    direct = a.relative(b.animal_id)
    if direct is not None:
        return direct
    reverse = b.relative(a.animal_id)
    if reverse is None:
        return None
    return KnownRelative(
        animal_id=b.animal_id,
        relationship=_INVERSE.get(reverse.relationship, reverse.relationship),
        coefficient=reverse.coefficient,
    )


def risk_level(relationship: str | None) -> str:
    if relationship in HIGH_RISK:
        return RiskLevel.HIGH.value
    if relationship in MEDIUM_RISK:
        return RiskLevel.MEDIUM.value
    return RiskLevel.LOW.value


def compatibility_score(a: GeneticProfile, b: GeneticProfile) -> int:
    score = 50.0
    score -= 30 * (a.inbreeding_coefficient + b.inbreeding_coefficient) / 2
    score += 2 * (10 - abs(a.traits.growth_rate - b.traits.growth_rate))
    survival = (
        a.performance.offspring_survival_rate + b.performance.offspring_survival_rate
    ) / 2
    score += survival / 2
    return max(0, min(100, round_half_up(score)))


def can_breed_with(a: GeneticProfile, b: GeneticProfile) -> CompatibilityResult:
    warnings: list[str] = []
    can_breed = True

    relative = find_relationship(a, b)
    level = risk_level(relative.relationship if relative else None)
    if level == RiskLevel.HIGH.value:
        can_breed = False
        warnings.append(f"High inbreeding risk: {relative.relationship}")
    elif level == RiskLevel.MEDIUM.value:
        warnings.append(f"Medium inbreeding risk: {relative.relationship}")

    if not a.is_breeder or not b.is_breeder:
        can_breed = False
        warnings.append(NOT_BREEDERS_WARNING)

    return CompatibilityResult(
        can_breed=can_breed,
        risk_level=level,
        compatibility_score=compatibility_score(a, b),
        relationship=relative,
        warnings=warnings,
    )


def avoid_severity(result: CompatibilityResult) -> str:
    return "high" if any(w.startswith("High") for w in result.warnings) else "medium"


def expected_benefits(a: GeneticProfile, b: GeneticProfile) -> list[str]:
    benefits = []
    if abs(a.traits.growth_rate - b.traits.growth_rate) >= 3:
        benefits.append("Complementary growth traits for improved offspring")
    if a.traits.offspring_viability >= 8 and b.traits.offspring_viability >= 8:
        benefits.append("High offspring viability expected")
    if a.inbreeding_coefficient < 0.1 and b.inbreeding_coefficient < 0.1:
        benefits.append("Low inbreeding risk")
    survival = (
        a.performance.offspring_survival_rate + b.performance.offspring_survival_rate
    ) / 2
    if survival > 80:
        benefits.append("High survival rate expected")
    return benefits or ["Standard breeding pair"]


def describe_relationship(relationship: str) -> str:
    return _DESCRIPTIONS.get(relationship, "Distant relative")


def risk_recommendations(level: str, combined_coefficient: float) -> list[str]:
    if level == RiskLevel.HIGH.value:
        return ["Avoid breeding - close relatives", "Consider using unrelated animals"]
    if level == RiskLevel.MEDIUM.value:
        return ["Proceed with caution", "Monitor offspring health closely"]
    if combined_coefficient > 0.3:
        return ["Moderate inbreeding risk", "Consider introducing new bloodline"]
    return ["Low inbreeding risk", "Suitable for breeding"]
