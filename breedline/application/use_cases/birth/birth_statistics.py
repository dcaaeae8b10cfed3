from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from breedline.application.interfaces.unit_of_work import UnitOfWork
from breedline.application.use_cases.guards import ensure_choice, ensure_farm_access, utcnow
from breedline.application.use_cases.mating.mating_statistics import PERIODS
from breedline.domain.models.animal import AnimalStatus

TOP_DAMS = 10


@dataclass(slots=True)
class DamProduction:
    dam_id: UUID
    birth_events: int = 0
    total_offspring: int = 0
    live_births: int = 0
    average_litter_size: float = 0.0


@dataclass(slots=True)
class BirthStatisticsOutput:
    period: str
    date_from: datetime
    total_birth_events: int = 0
    total_offspring_born: int = 0
    total_live_births: int = 0
    total_stillbirths: int = 0
    average_litter_size: float = 0.0
    stillbirth_rate: float = 0.0
    survival_rate: float = 0.0
    by_month: dict[str, int] = field(default_factory=dict)
    top_producing_dams: list[DamProduction] = field(default_factory=list)


async def execute(
    uow: UnitOfWork,
    user_id: UUID,
    farm_id: UUID,
    period: str = "year",
    now: datetime | None = None,
) -> BirthStatisticsOutput:
    ensure_choice(period, PERIODS, "period")
    await ensure_farm_access(uow, farm_id, user_id)
    date_from = (now or utcnow()) - PERIODS[period]
    events = await uow.birth_events.list(farm_id, date_from=date_from)

    stats = BirthStatisticsOutput(period=period, date_from=date_from)
    stats.total_birth_events = len(events)
    stats.total_offspring_born = sum(e.total_offspring for e in events)
    stats.total_live_births = sum(e.live_births for e in events)
    stats.total_stillbirths = sum(e.stillbirths for e in events)
    stats.by_month = dict(Counter(e.birth_date.strftime("%Y-%m") for e in events))
    if events:
        stats.average_litter_size = round(stats.total_live_births / len(events), 2)
    if stats.total_offspring_born:
        stats.stillbirth_rate = round(
            stats.total_stillbirths / stats.total_offspring_born * 100, 2
        )

    survived = 0
    for event in events:
        for offspring_id in event.offspring_ids:
            animal = await uow.animals.get(offspring_id)
            if animal and animal.status == AnimalStatus.ALIVE.value:
                survived += 1
    if stats.total_live_births:
        stats.survival_rate = round(survived / stats.total_live_births * 100, 2)

    dams: dict[UUID, DamProduction] = {}
    for event in events:
        dam = dams.setdefault(event.dam_id, DamProduction(dam_id=event.dam_id))
        dam.birth_events += 1
        dam.total_offspring += event.total_offspring
        dam.live_births += event.live_births
    for dam in dams.values():
        dam.average_litter_size = round(dam.live_births / dam.birth_events, 2)
    stats.top_producing_dams = sorted(
        dams.values(), key=lambda d: d.total_offspring, reverse=True
    )[:TOP_DAMS]
    return stats
