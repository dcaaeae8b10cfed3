from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from breedline.application.errors import ImmutableFieldChange, InvalidTransition
from breedline.application.interfaces.unit_of_work import UnitOfWork
from breedline.application.use_cases.guards import (
    ensure_aware,
    ensure_choice,
    ensure_not_pregnant,
    reject_immutable_changes,
    resolve_breeding_parties,
)
from breedline.application.use_cases.mating import get_mating
from breedline.domain.models.mating_event import MatingEvent, MatingStatus, MatingType

# Statuses that may be set directly; completed/failed only come from an outcome.
EDITABLE_STATUSES = (MatingStatus.PLANNED.value, MatingStatus.CANCELLED.value)


@dataclass(slots=True)
class UpdateMatingInput:
    farm_id: UUID | None = None
    sire_id: UUID | None = None
    dam_ids: list[UUID] | None = None
    mating_type: str | None = None
    mating_date: datetime | None = None
    expected_conception_date: datetime | None = None
    status: str | None = None
    location: str | None = None
    notes: str | None = None


async def execute(
    uow: UnitOfWork,
    user_id: UUID,
    event_id: UUID,
    payload: UpdateMatingInput,
) -> MatingEvent:
    event = await get_mating.execute(uow, user_id, event_id)
    reject_immutable_changes(event, payload, ("farm_id",))

    lineage_changed = (
        payload.sire_id is not None and payload.sire_id != event.sire_id
    ) or (payload.dam_ids is not None and list(payload.dam_ids) != event.dam_ids)
    if lineage_changed:
        if event.outcome is not None:
            raise ImmutableFieldChange(
                "Sire and dams cannot change once an outcome has been recorded"
            )
        parties = await resolve_breeding_parties(
            uow,
            event.farm_id,
            payload.sire_id or event.sire_id,
            payload.dam_ids if payload.dam_ids is not None else event.dam_ids,
        )
        for dam in parties.dams:
            if dam.id not in event.dam_ids:
                await ensure_not_pregnant(uow, dam)
        event.sire_id = parties.sire.id
        event.dam_ids = [dam.id for dam in parties.dams]

    if payload.status is not None and payload.status != event.status:
        ensure_choice(payload.status, EDITABLE_STATUSES, "status")
        if event.outcome is not None:
            raise InvalidTransition(
                f"Cannot move a mating event with outcome '{event.outcome}' "
                f"to '{payload.status}'"
            )
        event.status = payload.status

    if payload.mating_type is not None:
        ensure_choice(payload.mating_type, [t.value for t in MatingType], "mating_type")
        event.mating_type = payload.mating_type
    if payload.mating_date is not None:
        event.mating_date = ensure_aware(payload.mating_date)
    if payload.expected_conception_date is not None:
        event.expected_conception_date = ensure_aware(payload.expected_conception_date)
    if payload.location is not None:
        event.location = payload.location
    if payload.notes is not None:
        event.notes = payload.notes

    event.bump_version()
    return await uow.mating_events.update(event)
