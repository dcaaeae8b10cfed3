from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID, uuid4


class BirthStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    PARTIAL_SUCCESS = "partial_success"
    FAILED = "failed"


@dataclass(slots=True, frozen=True)
class LitterCounts:
    total_offspring: int
    live_births: int
    stillbirths: int = 0
    weak_offspring: int = 0
    male_offspring: int = 0
    female_offspring: int = 0

    def violations(self) -> list[str]:
        problems: list[str] = []
        for name in (
            "total_offspring",
            "live_births",
            "stillbirths",
            "weak_offspring",
            "male_offspring",
            "female_offspring",
        ):
            if getattr(self, name) < 0:
                problems.append(f"{name} cannot be negative")
        if self.live_births > self.total_offspring:
            problems.append("live_births cannot exceed total_offspring")
        if self.stillbirths > self.total_offspring:
            problems.append("stillbirths cannot exceed total_offspring")
        if self.live_births + self.stillbirths > self.total_offspring:
            problems.append("live_births plus stillbirths cannot exceed total_offspring")
        if self.weak_offspring > self.live_births:
            problems.append("weak_offspring cannot exceed live_births")
        if self.male_offspring + self.female_offspring > self.live_births:
            problems.append("male plus female offspring cannot exceed live_births")
        return problems


@dataclass(slots=True)
class NeonatalDeath:
    offspring_id: UUID
    date: datetime
    cause: str | None = None
    notes: str | None = None


@dataclass(slots=True)
class BirthEvent:
    id: UUID
    farm_id: UUID
    pregnancy_id: UUID
    dam_id: UUID
    sire_id: UUID
    birth_date: datetime
    total_offspring: int
    live_births: int
    stillbirths: int = 0
    weak_offspring: int = 0
    male_offspring: int = 0
    female_offspring: int = 0

    status: str = BirthStatus.IN_PROGRESS.value
    assisted_birth: bool = False
    assistance_type: str | None = None
    complications: str | None = None
    location: str | None = None
    notes: str | None = None
    offspring_ids: list[UUID] = field(default_factory=list)
    neonatal_deaths: list[NeonatalDeath] = field(default_factory=list)
    requires_followup: bool = False
    followup_date: datetime | None = None
    is_active: bool = True
    created_by: UUID | None = None

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 1

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        pregnancy_id: UUID,
        dam_id: UUID,
        sire_id: UUID,
        birth_date: datetime,
        counts: LitterCounts,
        assisted_birth: bool = False,
        assistance_type: str | None = None,
        complications: str | None = None,
        location: str | None = None,
        notes: str | None = None,
        created_by: UUID | None = None,
    ) -> BirthEvent:
        now = datetime.now(timezone.utc)
        if birth_date.tzinfo is None:
            birth_date = birth_date.replace(tzinfo=timezone.utc)
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            pregnancy_id=pregnancy_id,
            dam_id=dam_id,
            sire_id=sire_id,
            birth_date=birth_date,
            total_offspring=counts.total_offspring,
            live_births=counts.live_births,
            stillbirths=counts.stillbirths,
            weak_offspring=counts.weak_offspring,
            male_offspring=counts.male_offspring,
            female_offspring=counts.female_offspring,
            assisted_birth=assisted_birth,
            assistance_type=assistance_type,
            complications=complications,
            location=location,
            notes=notes,
            created_by=created_by,
            created_at=now,
            updated_at=now,
            version=1,
        )

    @property
    def counts(self) -> LitterCounts:
        return LitterCounts(
            total_offspring=self.total_offspring,
            live_births=self.live_births,
            stillbirths=self.stillbirths,
            weak_offspring=self.weak_offspring,
            male_offspring=self.male_offspring,
            female_offspring=self.female_offspring,
        )

    @property
    def success_rate(self) -> float:
        if self.total_offspring == 0:
            return 0.0
        return round(self.live_births / self.total_offspring * 100, 2)

    @property
    def stillbirth_rate(self) -> float:
        if self.total_offspring == 0:
            return 0.0
        return round(self.stillbirths / self.total_offspring * 100, 2)

    @property
    def survival_rate(self) -> float:
        if self.live_births == 0:
            return 0.0
        survivors = self.live_births - len(self.neonatal_deaths)
        return round(max(0, survivors) / self.live_births * 100, 2)

    @property
    def gender_ratio(self) -> dict[str, float | int | None]:
        ratio = None
        if self.female_offspring:
            ratio = round(self.male_offspring / self.female_offspring, 2)
        return {"male": self.male_offspring, "female": self.female_offspring, "ratio": ratio}

    def add_offspring(self, animal_id: UUID) -> None:
        self.offspring_ids = [*self.offspring_ids, animal_id]
        self.bump_version()

    def has_offspring(self, animal_id: UUID) -> bool:
        return animal_id in self.offspring_ids

    def has_neonatal_death(self, animal_id: UUID) -> bool:
        return any(d.offspring_id == animal_id for d in self.neonatal_deaths)

    def add_neonatal_death(self, death: NeonatalDeath) -> None:
        self.neonatal_deaths = [*self.neonatal_deaths, death]
        self.bump_version()

    def complete(self) -> None:
        if self.live_births == 0:
            self.status = BirthStatus.FAILED.value
        elif self.neonatal_deaths or self.stillbirths:
            self.status = BirthStatus.PARTIAL_SUCCESS.value
        else:
            self.status = BirthStatus.COMPLETED.value
        self.bump_version()

    def bump_version(self) -> None:
        self.version += 1
        self.updated_at = datetime.now(timezone.utc)
