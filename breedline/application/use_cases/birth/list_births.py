from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from breedline.application.interfaces.unit_of_work import UnitOfWork
from breedline.application.use_cases.guards import ensure_farm_access
from breedline.domain.models.birth_event import BirthEvent


@dataclass(slots=True)
class ListBirthsOutput:
    items: list[BirthEvent]
    total: int


async def execute(
    uow: UnitOfWork,
    user_id: UUID,
    farm_id: UUID,
    dam_id: UUID | None = None,
    sire_id: UUID | None = None,
    date_from: datetime | None = None,
    date_to: datetime | None = None,
    limit: int = 50,
    offset: int = 0,
) -> ListBirthsOutput:
    await ensure_farm_access(uow, farm_id, user_id)
    filters = dict(dam_id=dam_id, sire_id=sire_id, date_from=date_from, date_to=date_to)
    items = await uow.birth_events.list(farm_id, limit=limit, offset=offset, **filters)
    total = await uow.birth_events.count(farm_id, **filters)
    return ListBirthsOutput(items=items, total=total)
