from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from breedline.application.errors import AlreadyTerminal, ValidationError
from breedline.application.interfaces.unit_of_work import UnitOfWork
from breedline.application.use_cases.birth import get_birth
from breedline.application.use_cases.guards import ensure_aware, load_animal, utcnow
from breedline.application.use_cases.offspring.lifecycle import apply_transition
from breedline.domain.models.animal import AnimalStatus
from breedline.domain.models.birth_event import BirthEvent, NeonatalDeath
from breedline.domain.models.offspring_tracking import DeathDetails, TrackingStatus


@dataclass(slots=True)
class NeonatalDeathInput:
    offspring_id: UUID
    date: datetime | None = None
    cause: str | None = None
    notes: str | None = None


async def execute(
    uow: UnitOfWork,
    user_id: UUID,
    event_id: UUID,
    payload: NeonatalDeathInput,
    now: datetime | None = None,
) -> BirthEvent:
    event = await get_birth.execute(uow, user_id, event_id)
    offspring = await load_animal(uow, payload.offspring_id, "Offspring")
    if offspring.birth_event_id != event.id and not event.has_offspring(offspring.id):
        raise ValidationError("Offspring does not belong to this birth event")
    if event.has_neonatal_death(offspring.id):
        raise AlreadyTerminal("A neonatal death is already recorded for this offspring")

    died_at = ensure_aware(payload.date) if payload.date else (now or utcnow())
    event.add_neonatal_death(
        NeonatalDeath(
            offspring_id=offspring.id,
            date=died_at,
            cause=payload.cause,
            notes=payload.notes,
        )
    )
    event = await uow.birth_events.update(event)

    tracking = await uow.offspring_tracking.get_by_offspring(offspring.id)
    if tracking is not None:
        tracking.death = DeathDetails(
            date=died_at,
            cause=payload.cause,
            age_at_death_days=tracking.age_in_days(died_at),
            notes=payload.notes,
        )
        # Mirrors the death onto the registry entry as well.
        await apply_transition(uow, tracking, TrackingStatus.DIED.value, died_at)
    else:
        offspring.mark_status(AnimalStatus.DECEASED.value, at=died_at)
        await uow.animals.update(offspring)
    return event
