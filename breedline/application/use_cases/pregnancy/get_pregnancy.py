from __future__ import annotations

from datetime import datetime
from uuid import UUID

from breedline.application.errors import NotFound
from breedline.application.interfaces.unit_of_work import UnitOfWork
from breedline.application.use_cases.guards import ensure_farm_access, utcnow
from breedline.domain.models.pregnancy import Pregnancy


async def execute(
    uow: UnitOfWork,
    user_id: UUID,
    pregnancy_id: UUID,
    now: datetime | None = None,
) -> Pregnancy:
    pregnancy = await uow.pregnancies.get(pregnancy_id)
    if not pregnancy or not pregnancy.is_active:
        raise NotFound(f"Pregnancy {pregnancy_id} not found")
    await ensure_farm_access(uow, pregnancy.farm_id, user_id)
    pregnancy.advance(now or utcnow())
    return pregnancy
