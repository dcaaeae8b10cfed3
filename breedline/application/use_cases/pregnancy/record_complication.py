from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from breedline.application.errors import InvalidTransition
from breedline.application.interfaces.unit_of_work import UnitOfWork
from breedline.application.use_cases.guards import ensure_aware, ensure_choice, utcnow
from breedline.application.use_cases.pregnancy import get_pregnancy
from breedline.domain.models.pregnancy import (
    ComplicationSeverity,
    Pregnancy,
    PregnancyComplication,
)


@dataclass(slots=True)
class RecordComplicationInput:
    type: str
    description: str | None = None
    severity: str = ComplicationSeverity.MILD.value
    treatment: str | None = None
    resolved: bool = False
    date: datetime | None = None


async def execute(
    uow: UnitOfWork,
    user_id: UUID,
    pregnancy_id: UUID,
    payload: RecordComplicationInput,
    now: datetime | None = None,
) -> Pregnancy:
    ensure_choice(payload.severity, [s.value for s in ComplicationSeverity], "severity")
    now = now or utcnow()
    pregnancy = await get_pregnancy.execute(uow, user_id, pregnancy_id, now=now)
    if not pregnancy.is_open_for_delivery:
        raise InvalidTransition(f"Cannot add a complication to a {pregnancy.status} pregnancy")
    pregnancy.add_complication(
        PregnancyComplication(
            date=ensure_aware(payload.date) if payload.date else now,
            type=payload.type,
            description=payload.description,
            severity=payload.severity,
            treatment=payload.treatment,
            resolved=payload.resolved,
        )
    )
    return await uow.pregnancies.update(pregnancy)
