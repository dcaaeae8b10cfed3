from __future__ import annotations

from uuid import UUID

from breedline.application.errors import NotFound
from breedline.application.interfaces.unit_of_work import UnitOfWork
from breedline.application.use_cases.guards import ensure_farm_access
from breedline.domain.models.birth_event import BirthEvent


async def execute(uow: UnitOfWork, user_id: UUID, event_id: UUID) -> BirthEvent:
    event = await uow.birth_events.get(event_id)
    if not event or not event.is_active:
        raise NotFound(f"Birth event {event_id} not found")
    await ensure_farm_access(uow, event.farm_id, user_id)
    return event
