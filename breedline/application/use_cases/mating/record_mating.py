from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from breedline.application.interfaces.unit_of_work import UnitOfWork
from breedline.application.use_cases.guards import (
    ensure_aware,
    ensure_choice,
    ensure_farm_access,
    ensure_not_pregnant,
    resolve_breeding_parties,
)
from breedline.domain.models.mating_event import MatingEvent, MatingType


@dataclass(slots=True)
class RecordMatingInput:
    farm_id: UUID
    sire_id: UUID
    mating_date: datetime
    dam_ids: list[UUID] = field(default_factory=list)
    mating_type: str = MatingType.NATURAL.value
    expected_conception_date: datetime | None = None
    location: str | None = None
    notes: str | None = None


async def execute(uow: UnitOfWork, user_id: UUID, payload: RecordMatingInput) -> MatingEvent:
    ensure_choice(payload.mating_type, [t.value for t in MatingType], "mating_type")
    await ensure_farm_access(uow, payload.farm_id, user_id)

    parties = await resolve_breeding_parties(
        uow, payload.farm_id, payload.sire_id, payload.dam_ids
    )
    for dam in parties.dams:
        await ensure_not_pregnant(uow, dam)

    event = MatingEvent.create(
        farm_id=payload.farm_id,
        sire_id=parties.sire.id,
        dam_ids=[dam.id for dam in parties.dams],
        mating_type=payload.mating_type,
        mating_date=ensure_aware(payload.mating_date),
        expected_conception_date=(
            ensure_aware(payload.expected_conception_date)
            if payload.expected_conception_date
            else None
        ),
        location=payload.location,
        notes=payload.notes,
        created_by=user_id,
    )
    return await uow.mating_events.add(event)
