from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from breedline.application.errors import ConflictError, NotFound, ValidationError
from breedline.application.interfaces.unit_of_work import UnitOfWork
from breedline.application.use_cases.guards import (
    ensure_aware,
    ensure_farm_access,
    ensure_not_pregnant,
    resolve_breeding_parties,
    resolve_gestation_days,
    utcnow,
)
from breedline.domain.models.animal import ReproductiveStatus
from breedline.domain.models.pregnancy import Pregnancy

DEFAULT_GESTATION_DAYS = 30


@dataclass(slots=True)
class CreatePregnancyInput:
    farm_id: UUID
    dam_id: UUID
    sire_id: UUID
    mating_event_id: UUID
    conception_date: datetime
    expected_gestation_days: int | None = None
    notes: str | None = None


async def execute(
    uow: UnitOfWork,
    user_id: UUID,
    payload: CreatePregnancyInput,
    *,
    default_gestation_days: int = DEFAULT_GESTATION_DAYS,
    now: datetime | None = None,
) -> Pregnancy:
    await ensure_farm_access(uow, payload.farm_id, user_id)

    event = await uow.mating_events.get(payload.mating_event_id)
    if not event or not event.is_active or event.farm_id != payload.farm_id:
        raise NotFound(f"Mating event {payload.mating_event_id} not found")
    if event.sire_id != payload.sire_id or payload.dam_id not in event.dam_ids:
        raise ValidationError("Dam and sire must match the referenced mating event")

    parties = await resolve_breeding_parties(
        uow, payload.farm_id, payload.sire_id, [payload.dam_id]
    )
    dam = parties.dams[0]
    await ensure_not_pregnant(uow, dam)
    for existing in await uow.pregnancies.list_by_mating_event(event.id):
        if existing.dam_id == dam.id and existing.is_active:
            raise ConflictError("A pregnancy already exists for this dam and mating event")

    if payload.expected_gestation_days is not None and payload.expected_gestation_days <= 0:
        raise ValidationError("expected_gestation_days must be positive")
    gestation_days = payload.expected_gestation_days or resolve_gestation_days(
        parties.dam_caps[dam.id], parties.sire_caps, default_gestation_days
    )

    pregnancy = Pregnancy.create(
        farm_id=payload.farm_id,
        dam_id=dam.id,
        sire_id=parties.sire.id,
        mating_event_id=event.id,
        conception_date=ensure_aware(payload.conception_date),
        expected_gestation_days=gestation_days,
        confirmed_date=now or utcnow(),
        notes=payload.notes,
    )
    created = await uow.pregnancies.add(pregnancy)

    dam.set_reproductive_status(ReproductiveStatus.PREGNANT.value)
    await uow.animals.update(dam)
    return created
