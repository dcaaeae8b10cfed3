from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from uuid import UUID, uuid4


class TrackingStatus(str, Enum):
    ALIVE = "alive"
    WEANED = "weaned"
    SOLD = "sold"
    DIED = "died"
    TRANSFERRED = "transferred"
    CULLED = "culled"


ALLOWED_TRANSITIONS: dict[str, frozenset[str]] = {
    TrackingStatus.ALIVE.value: frozenset(
        {
            TrackingStatus.WEANED.value,
            TrackingStatus.SOLD.value,
            TrackingStatus.DIED.value,
            TrackingStatus.TRANSFERRED.value,
            TrackingStatus.CULLED.value,
        }
    ),
    TrackingStatus.WEANED.value: frozenset(
        {
            TrackingStatus.SOLD.value,
            TrackingStatus.DIED.value,
            TrackingStatus.TRANSFERRED.value,
            TrackingStatus.CULLED.value,
        }
    ),
}

# Tracking status -> registry status written onto the offspring's Animal entry.
REGISTRY_STATUS = {
    TrackingStatus.DIED.value: "deceased",
    TrackingStatus.SOLD.value: "sold",
    TrackingStatus.CULLED.value: "culled",
    TrackingStatus.TRANSFERRED.value: "transferred",
}


def can_transition(current: str, target: str) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())


def is_terminal(status: str) -> bool:
    return status not in ALLOWED_TRANSITIONS


@dataclass(slots=True)
class OffspringSnapshot:
    tag: str
    name: str | None
    gender: str
    breed: str | None
    birth_date: date | None


@dataclass(slots=True)
class GrowthMeasurement:
    date: datetime
    weight_kg: float | None = None
    height_cm: float | None = None
    notes: str | None = None


@dataclass(slots=True)
class SaleDetails:
    date: datetime
    price: float | None = None
    buyer: str | None = None
    notes: str | None = None


@dataclass(slots=True)
class DeathDetails:
    date: datetime
    cause: str | None = None
    age_at_death_days: int | None = None
    notes: str | None = None


@dataclass(slots=True)
class CullingDetails:
    date: datetime
    reason: str | None = None
    method: str | None = None
    notes: str | None = None


@dataclass(slots=True)
class OffspringTracking:
    id: UUID
    farm_id: UUID
    birth_event_id: UUID
    dam_id: UUID
    sire_id: UUID
    offspring_id: UUID
    snapshot: OffspringSnapshot

    status: str = TrackingStatus.ALIVE.value
    status_date: datetime | None = None
    birth_weight_kg: float | None = None
    weaning_weight_kg: float | None = None
    weaning_date: datetime | None = None
    growth_measurements: list[GrowthMeasurement] = field(default_factory=list)
    sale: SaleDetails | None = None
    death: DeathDetails | None = None
    culling: CullingDetails | None = None
    neonatal_health: str | None = None
    requires_special_attention: bool = False
    notes: str | None = None
    is_active: bool = True

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 1

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        birth_event_id: UUID,
        dam_id: UUID,
        sire_id: UUID,
        offspring_id: UUID,
        snapshot: OffspringSnapshot,
        birth_weight_kg: float | None = None,
        neonatal_health: str | None = None,
    ) -> OffspringTracking:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            birth_event_id=birth_event_id,
            dam_id=dam_id,
            sire_id=sire_id,
            offspring_id=offspring_id,
            snapshot=snapshot,
            status_date=now,
            birth_weight_kg=birth_weight_kg,
            neonatal_health=neonatal_health,
            created_at=now,
            updated_at=now,
            version=1,
        )

    @property
    def current_weight_kg(self) -> float | None:
        weighed = [m for m in self.growth_measurements if m.weight_kg is not None]
        if weighed:
            return max(weighed, key=lambda m: m.date).weight_kg
        if self.weaning_weight_kg is not None:
            return self.weaning_weight_kg
        return self.birth_weight_kg

    @property
    def is_weaned(self) -> bool:
        return self.weaning_date is not None

    def age_in_days(self, now: datetime) -> int | None:
        if self.snapshot.birth_date is None:
            return None
        return max(0, (now.date() - self.snapshot.birth_date).days)

    def set_status(self, status: str, at: datetime) -> None:
        self.status = status
        self.status_date = at
        self.bump_version()

    def wean(self, at: datetime, weight_kg: float | None = None) -> None:
        self.weaning_date = at
        if weight_kg is not None:
            self.weaning_weight_kg = weight_kg
        self.set_status(TrackingStatus.WEANED.value, at)

    def add_measurement(self, measurement: GrowthMeasurement) -> None:
        self.growth_measurements = [*self.growth_measurements, measurement]
        self.bump_version()

    def refresh_snapshot(self, snapshot: OffspringSnapshot) -> bool:
        if snapshot == self.snapshot:
            return False
        self.snapshot = snapshot
        self.bump_version()
        return True

    def bump_version(self) -> None:
        self.version += 1
        self.updated_at = datetime.now(timezone.utc)
