from __future__ import annotations

from uuid import UUID

from breedline.application.interfaces.unit_of_work import UnitOfWork
from breedline.application.use_cases.birth import get_birth
from breedline.domain.models.birth_event import BirthEvent


async def execute(uow: UnitOfWork, user_id: UUID, event_id: UUID) -> BirthEvent:
    """Close a birth event; the final status reflects stillbirths and neonatal deaths."""
    event = await get_birth.execute(uow, user_id, event_id)
    event.complete()
    return await uow.birth_events.update(event)
