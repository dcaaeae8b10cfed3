from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from breedline.application.interfaces.unit_of_work import UnitOfWork
from breedline.application.use_cases.guards import ensure_farm_access, utcnow
from breedline.domain.models.pregnancy import Pregnancy


@dataclass(slots=True)
class ListPregnanciesOutput:
    items: list[Pregnancy]
    total: int


async def execute(
    uow: UnitOfWork,
    user_id: UUID,
    farm_id: UUID,
    dam_id: UUID | None = None,
    sire_id: UUID | None = None,
    status: str | None = None,
    limit: int = 50,
    offset: int = 0,
    now: datetime | None = None,
) -> ListPregnanciesOutput:
    await ensure_farm_access(uow, farm_id, user_id)
    items = await uow.pregnancies.list(
        farm_id, dam_id=dam_id, sire_id=sire_id, status=status, limit=limit, offset=offset
    )
    total = await uow.pregnancies.count(farm_id, dam_id=dam_id, sire_id=sire_id, status=status)
    now = now or utcnow()
    for pregnancy in items:
        pregnancy.advance(now)
    return ListPregnanciesOutput(items=items, total=total)
