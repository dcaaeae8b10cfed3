from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from uuid import UUID

from breedline.application.errors import InvalidTransition, ValidationError
from breedline.application.interfaces.unit_of_work import UnitOfWork
from breedline.application.use_cases.guards import ensure_aware, reject_immutable_changes
from breedline.application.use_cases.pregnancy import get_pregnancy
from breedline.domain.models.pregnancy import Pregnancy

IMMUTABLE_FIELDS = ("farm_id", "dam_id", "sire_id", "mating_event_id")


@dataclass(slots=True)
class UpdatePregnancyInput:
    farm_id: UUID | None = None
    dam_id: UUID | None = None
    sire_id: UUID | None = None
    mating_event_id: UUID | None = None
    conception_date: datetime | None = None
    expected_gestation_days: int | None = None
    notes: str | None = None


async def execute(
    uow: UnitOfWork,
    user_id: UUID,
    pregnancy_id: UUID,
    payload: UpdatePregnancyInput,
    now: datetime | None = None,
) -> Pregnancy:
    pregnancy = await get_pregnancy.execute(uow, user_id, pregnancy_id, now=now)
    reject_immutable_changes(pregnancy, payload, IMMUTABLE_FIELDS)

    if payload.conception_date is not None or payload.expected_gestation_days is not None:
        if not pregnancy.is_open_for_delivery:
            raise InvalidTransition(
                f"Cannot reschedule a pregnancy with status '{pregnancy.status}'"
            )
        if payload.expected_gestation_days is not None:
            if payload.expected_gestation_days <= 0:
                raise ValidationError("expected_gestation_days must be positive")
            pregnancy.expected_gestation_days = payload.expected_gestation_days
        if payload.conception_date is not None:
            pregnancy.conception_date = ensure_aware(payload.conception_date)
        pregnancy.expected_delivery_date = pregnancy.conception_date + timedelta(
            days=pregnancy.expected_gestation_days
        )
    if payload.notes is not None:
        pregnancy.notes = payload.notes

    pregnancy.bump_version()
    return await uow.pregnancies.update(pregnancy)
