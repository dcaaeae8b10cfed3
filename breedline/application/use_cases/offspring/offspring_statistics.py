from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from uuid import UUID

from breedline.application.interfaces.unit_of_work import UnitOfWork
from breedline.application.use_cases.guards import ensure_farm_access
from breedline.domain.models.offspring_tracking import TrackingStatus


@dataclass(slots=True)
class OffspringStatisticsOutput:
    total: int = 0
    by_status: dict[str, int] = field(default_factory=dict)
    by_gender: dict[str, int] = field(default_factory=dict)
    survival_rate: float = 0.0
    weaning_rate: float = 0.0
    average_birth_weight_kg: float | None = None
    average_weaning_weight_kg: float | None = None


def _mean(values: list[float]) -> float | None:
    if not values:
        return None
    return round(sum(values) / len(values), 2)


async def execute(uow: UnitOfWork, user_id: UUID, farm_id: UUID) -> OffspringStatisticsOutput:
    await ensure_farm_access(uow, farm_id, user_id)
    records = await uow.offspring_tracking.list(farm_id)

    stats = OffspringStatisticsOutput(total=len(records))
    statuses = Counter(r.status for r in records)
    stats.by_status = dict(statuses)
    stats.by_gender = dict(Counter(r.snapshot.gender for r in records))
    if records:
        died = statuses[TrackingStatus.DIED.value]
        stats.survival_rate = round((len(records) - died) / len(records) * 100, 2)
        weaned = sum(1 for r in records if r.is_weaned)
        stats.weaning_rate = round(weaned / len(records) * 100, 2)
    stats.average_birth_weight_kg = _mean(
        [r.birth_weight_kg for r in records if r.birth_weight_kg is not None]
    )
    stats.average_weaning_weight_kg = _mean(
        [r.weaning_weight_kg for r in records if r.weaning_weight_kg is not None]
    )
    return stats
