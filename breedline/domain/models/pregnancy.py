from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from uuid import UUID, uuid4


class PregnancyStatus(str, Enum):
    CONFIRMED = "confirmed"
    PROGRESSING = "progressing"
    DELIVERED = "delivered"
    ABORTED = "aborted"
    FAILED = "failed"


class TerminationReason(str, Enum):
    NATURAL = "natural"
    MEDICAL = "medical"
    ACCIDENT = "accident"
    UNKNOWN = "unknown"


class ComplicationSeverity(str, Enum):
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"


ACTIVE_STATUSES = frozenset({PregnancyStatus.CONFIRMED.value, PregnancyStatus.PROGRESSING.value})
TERMINATION_STATUSES = frozenset({PregnancyStatus.ABORTED.value, PregnancyStatus.FAILED.value})

PROGRESSING_AFTER_DAYS = 7


@dataclass(slots=True)
class PregnancyCheckup:
    date: datetime
    weight_kg: float | None = None
    examiner: str | None = None
    findings: str | None = None
    notes: str | None = None


@dataclass(slots=True)
class PregnancyComplication:
    date: datetime
    type: str
    description: str | None = None
    severity: str = ComplicationSeverity.MILD.value
    treatment: str | None = None
    resolved: bool = False


@dataclass(slots=True)
class Pregnancy:
    id: UUID
    farm_id: UUID
    dam_id: UUID
    sire_id: UUID
    mating_event_id: UUID
    conception_date: datetime
    confirmed_date: datetime
    expected_gestation_days: int
    expected_delivery_date: datetime

    status: str = PregnancyStatus.CONFIRMED.value
    actual_delivery_date: datetime | None = None
    abortion_date: datetime | None = None
    termination_reason: str | None = None
    checkups: list[PregnancyCheckup] = field(default_factory=list)
    complications: list[PregnancyComplication] = field(default_factory=list)
    notes: str | None = None
    is_active: bool = True

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 1

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        dam_id: UUID,
        sire_id: UUID,
        mating_event_id: UUID,
        conception_date: datetime,
        expected_gestation_days: int,
        confirmed_date: datetime | None = None,
        notes: str | None = None,
    ) -> Pregnancy:
        now = datetime.now(timezone.utc)
        if conception_date.tzinfo is None:
            conception_date = conception_date.replace(tzinfo=timezone.utc)
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            dam_id=dam_id,
            sire_id=sire_id,
            mating_event_id=mating_event_id,
            conception_date=conception_date,
            confirmed_date=confirmed_date or now,
            expected_gestation_days=expected_gestation_days,
            expected_delivery_date=conception_date + timedelta(days=expected_gestation_days),
            notes=notes,
            created_at=now,
            updated_at=now,
            version=1,
        )

    @property
    def is_open_for_delivery(self) -> bool:
        return self.is_active and self.status in ACTIVE_STATUSES

    # Derived, read-time values. `now` is passed in so callers control the clock.

    def days_pregnant(self, now: datetime) -> int:
        return max(0, (now - self.conception_date).days)

    def days_remaining(self, now: datetime) -> int:
        return max(0, (self.expected_delivery_date - now).days)

    def gestation_progress(self, now: datetime) -> int:
        if self.expected_gestation_days <= 0:
            return 0
        return min(100, int(self.days_pregnant(now) / self.expected_gestation_days * 100))

    def effective_status(self, now: datetime) -> str:
        if (
            self.status == PregnancyStatus.CONFIRMED.value
            and self.days_pregnant(now) > PROGRESSING_AFTER_DAYS
        ):
            return PregnancyStatus.PROGRESSING.value
        return self.status

    def is_overdue(self, now: datetime) -> bool:
        return (
            now > self.expected_delivery_date
            and self.effective_status(now) == PregnancyStatus.PROGRESSING.value
        )

    def advance(self, now: datetime) -> bool:
        """Apply the confirmed -> progressing step if it is due. Returns True on change."""
        status = self.effective_status(now)
        if status == self.status:
            return False
        self.status = status
        self.bump_version()
        return True

    @property
    def unresolved_complications(self) -> list[PregnancyComplication]:
        return [c for c in self.complications if not c.resolved]

    def add_checkup(self, checkup: PregnancyCheckup) -> None:
        self.checkups = [*self.checkups, checkup]
        self.bump_version()

    def add_complication(self, complication: PregnancyComplication) -> None:
        self.complications = [*self.complications, complication]
        self.bump_version()

    def mark_delivered(self, delivered_at: datetime) -> None:
        self.status = PregnancyStatus.DELIVERED.value
        self.actual_delivery_date = delivered_at
        self.bump_version()

    def terminate(
        self,
        status: str,
        *,
        at: datetime,
        reason: str | None = None,
        notes: str | None = None,
    ) -> None:
        self.status = status
        self.abortion_date = at
        self.termination_reason = reason or TerminationReason.UNKNOWN.value
        if notes:
            self.notes = f"{self.notes}\n{notes}" if self.notes else notes
        self.bump_version()

    def deactivate(self) -> None:
        self.is_active = False
        self.bump_version()

    def bump_version(self) -> None:
        self.version += 1
        self.updated_at = datetime.now(timezone.utc)
