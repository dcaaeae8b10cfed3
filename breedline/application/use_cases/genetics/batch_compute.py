"""Force-refresh the genetic profile of every living animal of a farm.

Each animal is computed inside its own savepoint so one failure does not undo
the profiles already written; failures are collected and reported.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from breedline.application.interfaces.unit_of_work import UnitOfWork
from breedline.application.use_cases.genetics.compute_profile import (
    DEFAULT_OPTIONS,
    ProfileOptions,
    compute_profile,
)
from breedline.application.use_cases.guards import ensure_farm_access, utcnow
from breedline.domain.models.animal import AnimalStatus

logger = logging.getLogger(__name__)

MAX_REPORTED_ERRORS = 10


@dataclass(slots=True)
class BatchError:
    animal_id: UUID
    error: str


@dataclass(slots=True)
class BatchComputeOutput:
    total_animals: int
    processed: int
    failed: int
    errors: list[BatchError] = field(default_factory=list)


async def execute(
    uow: UnitOfWork,
    user_id: UUID,
    farm_id: UUID,
    *,
    options: ProfileOptions = DEFAULT_OPTIONS,
    now: datetime | None = None,
) -> BatchComputeOutput:
    await ensure_farm_access(uow, farm_id, user_id)
    now = now or utcnow()
    animals = await uow.animals.list_by_farm(farm_id, status=AnimalStatus.ALIVE.value)

    processed = 0
    errors: list[BatchError] = []
    for animal in animals:
        try:
            async with uow.savepoint():
                await compute_profile(uow, animal, True, options=options, now=now)
        except Exception as exc:
            logger.warning("Genetic profile for animal %s failed", animal.id, exc_info=True)
            errors.append(BatchError(animal_id=animal.id, error=str(exc)))
        else:
            processed += 1

    logger.info(
        "Batch computed %d/%d genetic profiles for farm %s", processed, len(animals), farm_id
    )
    return BatchComputeOutput(
        total_animals=len(animals),
        processed=processed,
        failed=len(errors),
        errors=errors[:MAX_REPORTED_ERRORS],
    )
