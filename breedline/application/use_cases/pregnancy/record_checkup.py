from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from breedline.application.errors import InvalidTransition
from breedline.application.interfaces.unit_of_work import UnitOfWork
from breedline.application.use_cases.guards import ensure_aware, utcnow
from breedline.application.use_cases.pregnancy import get_pregnancy
from breedline.domain.models.pregnancy import Pregnancy, PregnancyCheckup


@dataclass(slots=True)
class RecordCheckupInput:
    date: datetime | None = None
    weight_kg: float | None = None
    examiner: str | None = None
    findings: str | None = None
    notes: str | None = None


async def execute(
    uow: UnitOfWork,
    user_id: UUID,
    pregnancy_id: UUID,
    payload: RecordCheckupInput,
    now: datetime | None = None,
) -> Pregnancy:
    now = now or utcnow()
    pregnancy = await get_pregnancy.execute(uow, user_id, pregnancy_id, now=now)
    if not pregnancy.is_open_for_delivery:
        raise InvalidTransition(f"Cannot add a checkup to a {pregnancy.status} pregnancy")
    pregnancy.add_checkup(
        PregnancyCheckup(
            date=ensure_aware(payload.date) if payload.date else now,
            weight_kg=payload.weight_kg,
            examiner=payload.examiner,
            findings=payload.findings,
            notes=payload.notes,
        )
    )
    return await uow.pregnancies.update(pregnancy)
