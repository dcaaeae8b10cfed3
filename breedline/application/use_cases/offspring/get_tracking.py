from __future__ import annotations

import logging
from uuid import UUID

from breedline.application.errors import NotFound
from breedline.application.interfaces.unit_of_work import UnitOfWork
from breedline.application.use_cases.guards import load_owned_animal
from breedline.domain.models.animal import Animal, AnimalStatus
from breedline.domain.models.offspring_tracking import (
    DeathDetails,
    OffspringSnapshot,
    OffspringTracking,
    TrackingStatus,
)

logger = logging.getLogger(__name__)


def snapshot_of(animal: Animal) -> OffspringSnapshot:
    return OffspringSnapshot(
        tag=animal.tag,
        name=animal.name,
        gender=animal.gender,
        breed=animal.breed,
        birth_date=animal.birth_date,
    )


async def backfill_tracking(uow: UnitOfWork, animal: Animal) -> OffspringTracking:
    """Create the tracking record of an animal born before tracking existed."""
    if animal.birth_event_id is None or animal.sire_id is None or animal.dam_id is None:
        raise NotFound(f"No offspring tracking for animal {animal.id}")
    tracking = OffspringTracking.create(
        farm_id=animal.farm_id,
        birth_event_id=animal.birth_event_id,
        dam_id=animal.dam_id,
        sire_id=animal.sire_id,
        offspring_id=animal.id,
        snapshot=snapshot_of(animal),
    )
    if animal.status == AnimalStatus.DECEASED.value:
        tracking.status = TrackingStatus.DIED.value
        if animal.date_of_death:
            tracking.status_date = animal.date_of_death
            tracking.death = DeathDetails(date=animal.date_of_death, cause="unknown")
    logger.info("Backfilled offspring tracking for animal %s", animal.id)
    return await uow.offspring_tracking.add(tracking)


async def execute(uow: UnitOfWork, user_id: UUID, offspring_id: UUID) -> OffspringTracking:
    animal = await load_owned_animal(uow, user_id, offspring_id)
    tracking = await uow.offspring_tracking.get_by_offspring(animal.id)
    if tracking is None:
        return await backfill_tracking(uow, animal)
    if tracking.refresh_snapshot(snapshot_of(animal)):
        tracking = await uow.offspring_tracking.update(tracking)
    return tracking
