from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID, uuid4


class MatingType(str, Enum):
    NATURAL = "natural"
    ARTIFICIAL_INSEMINATION = "artificial_insemination"
    HAND_MATING = "hand_mating"
    PASTURE_MATING = "pasture_mating"


class MatingStatus(str, Enum):
    PLANNED = "planned"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


class MatingOutcome(str, Enum):
    SUCCESSFUL = "successful"
    UNSUCCESSFUL = "unsuccessful"
    UNKNOWN = "unknown"


OUTCOME_STATUS = {
    MatingOutcome.SUCCESSFUL.value: MatingStatus.COMPLETED.value,
    MatingOutcome.UNKNOWN.value: MatingStatus.COMPLETED.value,
    MatingOutcome.UNSUCCESSFUL.value: MatingStatus.FAILED.value,
}


@dataclass(slots=True)
class MatingEvent:
    id: UUID
    farm_id: UUID
    sire_id: UUID
    dam_ids: list[UUID]
    mating_type: str
    mating_date: datetime

    expected_conception_date: datetime | None = None
    status: str = MatingStatus.PLANNED.value
    outcome: str | None = None
    outcome_notes: str | None = None
    location: str | None = None
    notes: str | None = None
    created_by: UUID | None = None
    is_active: bool = True

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 1

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        sire_id: UUID,
        dam_ids: list[UUID],
        mating_type: str,
        mating_date: datetime,
        expected_conception_date: datetime | None = None,
        location: str | None = None,
        notes: str | None = None,
        created_by: UUID | None = None,
    ) -> MatingEvent:
        now = datetime.now(timezone.utc)
        if mating_date.tzinfo is None:
            mating_date = mating_date.replace(tzinfo=timezone.utc)
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            sire_id=sire_id,
            dam_ids=list(dict.fromkeys(dam_ids)),
            mating_type=mating_type,
            mating_date=mating_date,
            expected_conception_date=expected_conception_date,
            location=location,
            notes=notes,
            created_by=created_by,
            created_at=now,
            updated_at=now,
            version=1,
        )

    @property
    def is_successful(self) -> bool:
        return self.outcome == MatingOutcome.SUCCESSFUL.value

    @property
    def conception_date(self) -> datetime:
        return self.expected_conception_date or self.mating_date

    def can_record_outcome(self, outcome: str) -> bool:
        if not self.is_active or self.status == MatingStatus.CANCELLED.value:
            return False
        if self.outcome in (None, MatingOutcome.UNKNOWN.value):
            return True
        # Re-recording the same successful outcome is a no-op, not an error.
        return self.is_successful and outcome == MatingOutcome.SUCCESSFUL.value

    def record_outcome(self, outcome: str, notes: str | None = None) -> None:
        self.outcome = outcome
        self.status = OUTCOME_STATUS[outcome]
        if notes is not None:
            self.outcome_notes = notes
        self.bump_version()

    def deactivate(self) -> None:
        self.is_active = False
        self.bump_version()

    def bump_version(self) -> None:
        self.version += 1
        self.updated_at = datetime.now(timezone.utc)
