from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from breedline.application.errors import InvalidTransition
from breedline.application.interfaces.unit_of_work import UnitOfWork
from breedline.application.use_cases.guards import ensure_aware, ensure_choice, utcnow
from breedline.application.use_cases.pregnancy import get_pregnancy
from breedline.domain.models.animal import ReproductiveStatus
from breedline.domain.models.pregnancy import (
    TERMINATION_STATUSES,
    Pregnancy,
    TerminationReason,
)


@dataclass(slots=True)
class TerminatePregnancyInput:
    status: str
    reason: str = TerminationReason.UNKNOWN.value
    notes: str | None = None
    date: datetime | None = None


async def execute(
    uow: UnitOfWork,
    user_id: UUID,
    pregnancy_id: UUID,
    payload: TerminatePregnancyInput,
    now: datetime | None = None,
) -> Pregnancy:
    ensure_choice(payload.status, sorted(TERMINATION_STATUSES), "status")
    ensure_choice(payload.reason, [r.value for r in TerminationReason], "reason")
    now = now or utcnow()

    pregnancy = await get_pregnancy.execute(uow, user_id, pregnancy_id, now=now)
    if not pregnancy.is_open_for_delivery:
        raise InvalidTransition(
            f"Cannot terminate a pregnancy with status '{pregnancy.status}'",
            details={"status": pregnancy.status},
        )

    pregnancy.terminate(
        payload.status,
        at=ensure_aware(payload.date) if payload.date else now,
        reason=payload.reason,
        notes=payload.notes,
    )
    updated = await uow.pregnancies.update(pregnancy)

    dam = await uow.animals.get(pregnancy.dam_id)
    if dam:
        dam.set_reproductive_status(ReproductiveStatus.OPEN.value)
        await uow.animals.update(dam)
    return updated
