from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from breedline.application.errors import ValidationError
from breedline.application.interfaces.unit_of_work import UnitOfWork
from breedline.application.use_cases.guards import ensure_aware, utcnow
from breedline.application.use_cases.offspring import get_tracking
from breedline.application.use_cases.offspring.lifecycle import apply_transition
from breedline.domain.models.offspring_tracking import (
    OffspringTracking,
    SaleDetails,
    TrackingStatus,
)


@dataclass(slots=True)
class RecordSaleInput:
    date: datetime | None = None
    price: float | None = None
    buyer: str | None = None
    notes: str | None = None


async def execute(
    uow: UnitOfWork,
    user_id: UUID,
    offspring_id: UUID,
    payload: RecordSaleInput,
    now: datetime | None = None,
) -> OffspringTracking:
    if payload.price is not None and payload.price < 0:
        raise ValidationError("Sale price cannot be negative")
    tracking = await get_tracking.execute(uow, user_id, offspring_id)
    at = ensure_aware(payload.date) if payload.date else (now or utcnow())
    tracking.sale = SaleDetails(
        date=at, price=payload.price, buyer=payload.buyer, notes=payload.notes
    )
    return await apply_transition(uow, tracking, TrackingStatus.SOLD.value, at)
