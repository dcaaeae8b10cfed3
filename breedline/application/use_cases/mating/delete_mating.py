from __future__ import annotations

from uuid import UUID

from breedline.application.errors import ConflictError
from breedline.application.interfaces.unit_of_work import UnitOfWork
from breedline.application.use_cases.mating import get_mating
from breedline.domain.models.pregnancy import ACTIVE_STATUSES


async def execute(uow: UnitOfWork, user_id: UUID, event_id: UUID) -> None:
    event = await get_mating.execute(uow, user_id, event_id)
    pregnancies = await uow.pregnancies.list_by_mating_event(event.id)
    if any(p.is_active and p.status in ACTIVE_STATUSES for p in pregnancies):
        raise ConflictError("Cannot delete a mating event with active pregnancies")
    event.deactivate()
    await uow.mating_events.update(event)
