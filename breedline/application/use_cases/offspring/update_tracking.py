from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from breedline.application.interfaces.unit_of_work import UnitOfWork
from breedline.application.use_cases.guards import (
    ensure_aware,
    ensure_choice,
    reject_immutable_changes,
    utcnow,
)
from breedline.application.use_cases.offspring import get_tracking
from breedline.application.use_cases.offspring.lifecycle import apply_transition
from breedline.domain.models.offspring_tracking import OffspringTracking, TrackingStatus

IMMUTABLE_FIELDS = ("farm_id", "birth_event_id", "dam_id", "sire_id", "offspring_id")


@dataclass(slots=True)
class UpdateTrackingInput:
    farm_id: UUID | None = None
    birth_event_id: UUID | None = None
    dam_id: UUID | None = None
    sire_id: UUID | None = None
    offspring_id: UUID | None = None
    status: str | None = None
    status_date: datetime | None = None
    birth_weight_kg: float | None = None
    neonatal_health: str | None = None
    requires_special_attention: bool | None = None
    notes: str | None = None


async def execute(
    uow: UnitOfWork,
    user_id: UUID,
    offspring_id: UUID,
    payload: UpdateTrackingInput,
    now: datetime | None = None,
) -> OffspringTracking:
    tracking = await get_tracking.execute(uow, user_id, offspring_id)
    reject_immutable_changes(tracking, payload, IMMUTABLE_FIELDS)

    if payload.birth_weight_kg is not None:
        tracking.birth_weight_kg = payload.birth_weight_kg
    if payload.neonatal_health is not None:
        tracking.neonatal_health = payload.neonatal_health
    if payload.requires_special_attention is not None:
        tracking.requires_special_attention = payload.requires_special_attention
    if payload.notes is not None:
        tracking.notes = payload.notes

    if payload.status is not None and payload.status != tracking.status:
        ensure_choice(payload.status, [s.value for s in TrackingStatus], "status")
        at = ensure_aware(payload.status_date) if payload.status_date else (now or utcnow())
        return await apply_transition(uow, tracking, payload.status, at)

    tracking.bump_version()
    return await uow.offspring_tracking.update(tracking)
