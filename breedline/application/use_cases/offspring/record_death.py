from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from breedline.application.interfaces.unit_of_work import UnitOfWork
from breedline.application.use_cases.guards import ensure_aware, utcnow
from breedline.application.use_cases.offspring import get_tracking
from breedline.application.use_cases.offspring.lifecycle import apply_transition
from breedline.domain.models.offspring_tracking import (
    DeathDetails,
    OffspringTracking,
    TrackingStatus,
)


@dataclass(slots=True)
class RecordDeathInput:
    date: datetime | None = None
    cause: str | None = None
    notes: str | None = None


async def execute(
    uow: UnitOfWork,
    user_id: UUID,
    offspring_id: UUID,
    payload: RecordDeathInput,
    now: datetime | None = None,
) -> OffspringTracking:
    tracking = await get_tracking.execute(uow, user_id, offspring_id)
    at = ensure_aware(payload.date) if payload.date else (now or utcnow())
    tracking.death = DeathDetails(
        date=at,
        cause=payload.cause,
        age_at_death_days=tracking.age_in_days(at),
        notes=payload.notes,
    )
    return await apply_transition(uow, tracking, TrackingStatus.DIED.value, at)
