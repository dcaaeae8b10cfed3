from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from breedline.application.interfaces.unit_of_work import UnitOfWork
from breedline.application.use_cases.guards import ensure_farm_access, utcnow
from breedline.domain.models.pregnancy import ACTIVE_STATUSES, Pregnancy

DUE_SOON_DAYS = 7


@dataclass(slots=True)
class PregnancyAlertsOutput:
    due_soon: list[Pregnancy] = field(default_factory=list)
    overdue: list[Pregnancy] = field(default_factory=list)
    with_complications: list[Pregnancy] = field(default_factory=list)


async def execute(
    uow: UnitOfWork,
    user_id: UUID,
    farm_id: UUID,
    due_soon_days: int = DUE_SOON_DAYS,
    now: datetime | None = None,
) -> PregnancyAlertsOutput:
    await ensure_farm_access(uow, farm_id, user_id)
    now = now or utcnow()
    alerts = PregnancyAlertsOutput()
    for status in sorted(ACTIVE_STATUSES):
        for pregnancy in await uow.pregnancies.list(farm_id, status=status):
            pregnancy.advance(now)
            if pregnancy.is_overdue(now):
                alerts.overdue.append(pregnancy)
            elif now <= pregnancy.expected_delivery_date and (
                pregnancy.days_remaining(now) <= due_soon_days
            ):
                alerts.due_soon.append(pregnancy)
            if pregnancy.unresolved_complications:
                alerts.with_complications.append(pregnancy)
    alerts.due_soon.sort(key=lambda p: p.expected_delivery_date)
    alerts.overdue.sort(key=lambda p: p.expected_delivery_date)
    return alerts
