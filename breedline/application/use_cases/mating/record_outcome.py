"""Record a mating outcome and fan a successful one out into pregnancies.

This is the only place where pregnancies are derived from a mating event. The
whole fan-out runs inside the caller's unit of work, so a failure on any dam
leaves no pregnancy behind.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from breedline.application.errors import InvalidTransition
from breedline.application.interfaces.unit_of_work import UnitOfWork
from breedline.application.use_cases.guards import (
    capabilities_for,
    ensure_choice,
    ensure_not_pregnant,
    load_animal,
    resolve_gestation_days,
    utcnow,
)
from breedline.application.use_cases.mating import get_mating
from breedline.domain.models.mating_event import MatingEvent, MatingOutcome
from breedline.domain.models.pregnancy import Pregnancy

DEFAULT_GESTATION_DAYS = 30


@dataclass(slots=True)
class RecordOutcomeInput:
    outcome: str
    notes: str | None = None


@dataclass(slots=True)
class RecordOutcomeOutput:
    mating_event: MatingEvent
    pregnancies: list[Pregnancy] = field(default_factory=list)


async def spawn_pregnancies(
    uow: UnitOfWork,
    event: MatingEvent,
    *,
    default_gestation_days: int = DEFAULT_GESTATION_DAYS,
    now: datetime | None = None,
) -> list[Pregnancy]:
    """Ensure one pregnancy per dam exists for `event`. Safe to call repeatedly."""
    now = now or utcnow()
    pregnancies = await uow.pregnancies.list_by_mating_event(event.id)
    covered = {p.dam_id for p in pregnancies}

    sire = await uow.animals.get(event.sire_id)
    sire_caps = await capabilities_for(uow, sire) if sire else None

    for dam_id in event.dam_ids:
        if dam_id in covered:
            continue
        dam = await load_animal(uow, dam_id, "Dam")
        await ensure_not_pregnant(uow, dam)
        dam_caps = await capabilities_for(uow, dam)
        pregnancy = Pregnancy.create(
            farm_id=event.farm_id,
            dam_id=dam.id,
            sire_id=event.sire_id,
            mating_event_id=event.id,
            conception_date=event.conception_date,
            expected_gestation_days=resolve_gestation_days(
                dam_caps, sire_caps, default_gestation_days
            ),
            confirmed_date=now,
        )
        pregnancies.append(await uow.pregnancies.add(pregnancy))
        covered.add(dam_id)
    return pregnancies


async def execute(
    uow: UnitOfWork,
    user_id: UUID,
    event_id: UUID,
    payload: RecordOutcomeInput,
    *,
    default_gestation_days: int = DEFAULT_GESTATION_DAYS,
    now: datetime | None = None,
) -> RecordOutcomeOutput:
    ensure_choice(payload.outcome, [o.value for o in MatingOutcome], "outcome")
    event = await get_mating.execute(uow, user_id, event_id)

    if not event.can_record_outcome(payload.outcome):
        raise InvalidTransition(
            f"Cannot record outcome '{payload.outcome}' for a mating event with "
            f"status '{event.status}' and outcome '{event.outcome}'",
            details={"status": event.status, "outcome": event.outcome},
        )

    if not event.is_successful:
        event.record_outcome(payload.outcome, payload.notes)
        event = await uow.mating_events.update(event)

    if not event.is_successful:
        return RecordOutcomeOutput(mating_event=event)

    pregnancies = await spawn_pregnancies(
        uow, event, default_gestation_days=default_gestation_days, now=now
    )
    return RecordOutcomeOutput(mating_event=event, pregnancies=pregnancies)
