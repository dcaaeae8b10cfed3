from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from uuid import UUID, uuid4


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    UNKNOWN = "unknown"


class AnimalStatus(str, Enum):
    ALIVE = "alive"
    DECEASED = "deceased"
    SOLD = "sold"
    TRANSFERRED = "transferred"
    CULLED = "culled"
    ARCHIVED = "archived"


class ReproductiveStatus(str, Enum):
    IMMATURE = "immature"
    OPEN = "open"
    PREGNANT = "pregnant"
    LACTATING = "lactating"
    DRY = "dry"
    INFERTILE = "infertile"


class BreedingStatus(str, Enum):
    ACTIVE = "active"
    RETIRED = "retired"
    INFERTILE = "infertile"


class HealthStatus(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    CRITICAL = "critical"


@dataclass(slots=True)
class Animal:
    id: UUID
    farm_id: UUID
    animal_type_id: UUID
    tag: str
    gender: str
    name: str | None = None
    breed: str | None = None
    birth_date: date | None = None
    status: str = AnimalStatus.ALIVE.value
    is_active: bool = True
    reproductive_status: str | None = None
    breeding_status: str | None = None
    health_status: str | None = HealthStatus.GOOD.value
    weight_kg: float | None = None

    # Lineage
    sire_id: UUID | None = None
    dam_id: UUID | None = None
    birth_event_id: UUID | None = None

    date_of_death: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 1

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        animal_type_id: UUID,
        tag: str,
        gender: str,
        name: str | None = None,
        breed: str | None = None,
        birth_date: date | None = None,
        reproductive_status: str | None = None,
        breeding_status: str | None = None,
        health_status: str | None = HealthStatus.GOOD.value,
        weight_kg: float | None = None,
        sire_id: UUID | None = None,
        dam_id: UUID | None = None,
        birth_event_id: UUID | None = None,
    ) -> Animal:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            animal_type_id=animal_type_id,
            tag=tag,
            gender=gender,
            name=name,
            breed=breed,
            birth_date=birth_date,
            reproductive_status=reproductive_status,
            breeding_status=breeding_status,
            health_status=health_status,
            weight_kg=weight_kg,
            sire_id=sire_id,
            dam_id=dam_id,
            birth_event_id=birth_event_id,
            created_at=now,
            updated_at=now,
            version=1,
        )

    @property
    def is_male(self) -> bool:
        return self.gender == Gender.MALE.value

    @property
    def is_female(self) -> bool:
        return self.gender == Gender.FEMALE.value

    @property
    def is_alive(self) -> bool:
        return self.status == AnimalStatus.ALIVE.value

    def age_in_days(self, now: datetime) -> int | None:
        if self.birth_date is None:
            return None
        return max(0, (now.date() - self.birth_date).days)

    def set_reproductive_status(self, value: str | None) -> None:
        self.reproductive_status = value
        self.bump_version()

    def mark_status(self, status: str, *, at: datetime | None = None) -> None:
        self.status = status
        if status == AnimalStatus.DECEASED.value:
            self.date_of_death = at or datetime.now(timezone.utc)
        self.bump_version()

    def bump_version(self) -> None:
        self.version += 1
        self.updated_at = datetime.now(timezone.utc)
