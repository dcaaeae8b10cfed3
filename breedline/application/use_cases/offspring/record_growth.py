from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from breedline.application.errors import InvalidTransition, ValidationError
from breedline.application.interfaces.unit_of_work import UnitOfWork
from breedline.application.use_cases.guards import ensure_aware, utcnow
from breedline.application.use_cases.offspring import get_tracking
from breedline.domain.models.offspring_tracking import (
    GrowthMeasurement,
    OffspringTracking,
    TrackingStatus,
)

GROWING_STATUSES = (TrackingStatus.ALIVE.value, TrackingStatus.WEANED.value)


@dataclass(slots=True)
class RecordGrowthInput:
    date: datetime | None = None
    weight_kg: float | None = None
    height_cm: float | None = None
    notes: str | None = None


async def execute(
    uow: UnitOfWork,
    user_id: UUID,
    offspring_id: UUID,
    payload: RecordGrowthInput,
    now: datetime | None = None,
) -> OffspringTracking:
    if payload.weight_kg is None and payload.height_cm is None:
        raise ValidationError("A measurement needs a weight or a height")
    for name in ("weight_kg", "height_cm"):
        value = getattr(payload, name)
        if value is not None and value <= 0:
            raise ValidationError(f"{name} must be positive", details={"field": name})

    tracking = await get_tracking.execute(uow, user_id, offspring_id)
    if tracking.status not in GROWING_STATUSES:
        raise InvalidTransition(
            f"Cannot record growth for offspring with status '{tracking.status}'"
        )
    tracking.add_measurement(
        GrowthMeasurement(
            date=ensure_aware(payload.date) if payload.date else (now or utcnow()),
            weight_kg=payload.weight_kg,
            height_cm=payload.height_cm,
            notes=payload.notes,
        )
    )
    tracking = await uow.offspring_tracking.update(tracking)

    current = tracking.current_weight_kg
    if payload.weight_kg is not None and current is not None:
        animal = await uow.animals.get(tracking.offspring_id)
        if animal is not None and animal.weight_kg != current:
            animal.weight_kg = current
            animal.bump_version()
            await uow.animals.update(animal)
    return tracking
