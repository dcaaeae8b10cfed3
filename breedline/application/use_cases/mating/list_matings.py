from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from breedline.application.interfaces.unit_of_work import UnitOfWork
from breedline.application.use_cases.guards import ensure_choice, ensure_farm_access
from breedline.domain.models.mating_event import MatingEvent

ROLES = ("sire", "dam", "any")


@dataclass(slots=True)
class ListMatingsOutput:
    items: list[MatingEvent]
    total: int


async def execute(
    uow: UnitOfWork,
    user_id: UUID,
    farm_id: UUID,
    animal_id: UUID | None = None,
    role: str = "any",
    status: str | None = None,
    date_from: datetime | None = None,
    date_to: datetime | None = None,
    limit: int = 50,
    offset: int = 0,
) -> ListMatingsOutput:
    ensure_choice(role, ROLES, "role")
    await ensure_farm_access(uow, farm_id, user_id)
    filters = dict(
        animal_id=animal_id,
        role=role,
        status=status,
        date_from=date_from,
        date_to=date_to,
    )
    items = await uow.mating_events.list(farm_id, limit=limit, offset=offset, **filters)
    total = await uow.mating_events.count(farm_id, **filters)
    return ListMatingsOutput(items=items, total=total)
