from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from breedline.application.interfaces.unit_of_work import UnitOfWork
from breedline.application.use_cases.birth import get_birth
from breedline.application.use_cases.guards import ensure_aware, reject_immutable_changes
from breedline.domain.models.birth_event import BirthEvent

IMMUTABLE_FIELDS = ("farm_id", "pregnancy_id", "dam_id", "sire_id")


@dataclass(slots=True)
class UpdateBirthInput:
    farm_id: UUID | None = None
    pregnancy_id: UUID | None = None
    dam_id: UUID | None = None
    sire_id: UUID | None = None
    assisted_birth: bool | None = None
    assistance_type: str | None = None
    complications: str | None = None
    location: str | None = None
    notes: str | None = None
    requires_followup: bool | None = None
    followup_date: datetime | None = None


async def execute(
    uow: UnitOfWork,
    user_id: UUID,
    event_id: UUID,
    payload: UpdateBirthInput,
) -> BirthEvent:
    event = await get_birth.execute(uow, user_id, event_id)
    reject_immutable_changes(event, payload, IMMUTABLE_FIELDS)

    if payload.assisted_birth is not None:
        event.assisted_birth = payload.assisted_birth
    if payload.assistance_type is not None:
        event.assistance_type = payload.assistance_type
    if payload.complications is not None:
        event.complications = payload.complications
    if payload.location is not None:
        event.location = payload.location
    if payload.notes is not None:
        event.notes = payload.notes
    if payload.requires_followup is not None:
        event.requires_followup = payload.requires_followup
    if payload.followup_date is not None:
        event.followup_date = ensure_aware(payload.followup_date)

    event.bump_version()
    return await uow.birth_events.update(event)
