from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from breedline.application.interfaces.unit_of_work import UnitOfWork
from breedline.application.use_cases.guards import ensure_aware, utcnow
from breedline.application.use_cases.offspring import get_tracking
from breedline.application.use_cases.offspring.lifecycle import apply_transition
from breedline.domain.models.offspring_tracking import OffspringTracking, TrackingStatus


@dataclass(slots=True)
class RecordWeaningInput:
    date: datetime | None = None
    weight_kg: float | None = None
    notes: str | None = None


async def execute(
    uow: UnitOfWork,
    user_id: UUID,
    offspring_id: UUID,
    payload: RecordWeaningInput,
    now: datetime | None = None,
) -> OffspringTracking:
    tracking = await get_tracking.execute(uow, user_id, offspring_id)
    if payload.weight_kg is not None:
        tracking.weaning_weight_kg = payload.weight_kg
    if payload.notes:
        tracking.notes = payload.notes
    at = ensure_aware(payload.date) if payload.date else (now or utcnow())
    return await apply_transition(uow, tracking, TrackingStatus.WEANED.value, at)
