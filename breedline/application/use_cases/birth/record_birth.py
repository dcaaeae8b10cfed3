"""Record a delivery: persist the birth, close the pregnancy, create the litter.

The steps run in a fixed order inside the caller's unit of work. Once the birth
row exists, any unexpected failure is logged and re-raised as an
InfrastructureError so the transaction is rolled back instead of leaving a
delivered pregnancy without its offspring.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from breedline.application.errors import (
    AppError,
    ConflictError,
    InfrastructureError,
    InvalidSex,
    InvalidTransition,
    NotFound,
    ValidationError,
)
from breedline.application.interfaces.unit_of_work import UnitOfWork
from breedline.application.use_cases.birth.offspring_factory import (
    CreatedOffspring,
    create_offspring,
)
from breedline.application.use_cases.guards import (
    ensure_aware,
    ensure_farm_access,
    load_animal,
    utcnow,
)
from breedline.domain.models.birth_event import BirthEvent, LitterCounts

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RecordBirthInput:
    farm_id: UUID
    pregnancy_id: UUID
    dam_id: UUID
    sire_id: UUID
    birth_date: datetime
    total_offspring: int
    live_births: int
    stillbirths: int = 0
    weak_offspring: int = 0
    male_offspring: int = 0
    female_offspring: int = 0
    assisted_birth: bool = False
    assistance_type: str | None = None
    complications: str | None = None
    location: str | None = None
    notes: str | None = None
    birth_weight_kg: float | None = None


@dataclass(slots=True)
class RecordBirthOutput:
    birth_event: BirthEvent
    offspring: list[CreatedOffspring] = field(default_factory=list)


def validate_counts(counts: LitterCounts) -> None:
    problems = counts.violations()
    if problems:
        raise ValidationError(problems[0], details={"violations": problems})


async def execute(
    uow: UnitOfWork,
    user_id: UUID,
    payload: RecordBirthInput,
    now: datetime | None = None,
) -> RecordBirthOutput:
    await ensure_farm_access(uow, payload.farm_id, user_id)
    now = now or utcnow()

    counts = LitterCounts(
        total_offspring=payload.total_offspring,
        live_births=payload.live_births,
        stillbirths=payload.stillbirths,
        weak_offspring=payload.weak_offspring,
        male_offspring=payload.male_offspring,
        female_offspring=payload.female_offspring,
    )
    validate_counts(counts)

    pregnancy = await uow.pregnancies.get(payload.pregnancy_id)
    if not pregnancy or not pregnancy.is_active or pregnancy.farm_id != payload.farm_id:
        raise NotFound(f"Pregnancy {payload.pregnancy_id} not found")
    pregnancy.advance(now)
    if not pregnancy.is_open_for_delivery:
        raise InvalidTransition(
            f"Pregnancy with status '{pregnancy.status}' is not ready for birth",
            details={"status": pregnancy.status},
        )

    dam = await load_animal(uow, payload.dam_id, "Dam")
    if not dam.is_female:
        raise InvalidSex(f"Dam {dam.id} must be female", details={"animal_id": str(dam.id)})
    sire = await load_animal(uow, payload.sire_id, "Sire")
    if not sire.is_male:
        raise InvalidSex(f"Sire {sire.id} must be male", details={"animal_id": str(sire.id)})
    if dam.id != pregnancy.dam_id or sire.id != pregnancy.sire_id:
        raise ValidationError("Dam and sire must match the referenced pregnancy")

    if await uow.birth_events.get_by_pregnancy(pregnancy.id):
        raise ConflictError("A birth has already been recorded for this pregnancy")

    birth_date = ensure_aware(payload.birth_date)
    event = BirthEvent.create(
        farm_id=payload.farm_id,
        pregnancy_id=pregnancy.id,
        dam_id=dam.id,
        sire_id=sire.id,
        birth_date=birth_date,
        counts=counts,
        assisted_birth=payload.assisted_birth,
        assistance_type=payload.assistance_type,
        complications=payload.complications,
        location=payload.location,
        notes=payload.notes,
        created_by=user_id,
    )
    event = await uow.birth_events.add(event)

    try:
        pregnancy.mark_delivered(birth_date)
        await uow.pregnancies.update(pregnancy)
        offspring = await create_offspring(
            uow, event, dam, sire, birth_weight_kg=payload.birth_weight_kg
        )
        if offspring:
            event = await uow.birth_events.update(event)
    except AppError:
        raise
    except Exception as exc:
        logger.exception(
            "Birth %s for pregnancy %s failed after the birth row was written",
            event.id,
            pregnancy.id,
        )
        raise InfrastructureError("Failed to record birth; no changes were saved") from exc

    logger.info(
        "Recorded birth %s: pregnancy %s delivered, %d live of %d",
        event.id,
        pregnancy.id,
        event.live_births,
        event.total_offspring,
    )
    return RecordBirthOutput(birth_event=event, offspring=offspring)
