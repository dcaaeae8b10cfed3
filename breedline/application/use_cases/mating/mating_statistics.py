from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from uuid import UUID

from breedline.application.interfaces.unit_of_work import UnitOfWork
from breedline.application.use_cases.guards import ensure_choice, ensure_farm_access, utcnow
from breedline.domain.models.mating_event import MatingOutcome

PERIODS = {
    "week": timedelta(days=7),
    "month": timedelta(days=30),
    "quarter": timedelta(days=90),
    "year": timedelta(days=365),
}


@dataclass(slots=True)
class MatingStatisticsOutput:
    period: str
    date_from: datetime
    total_events: int
    total_dams: int
    success_rate: float
    by_status: dict[str, int] = field(default_factory=dict)
    by_outcome: dict[str, int] = field(default_factory=dict)
    by_type: dict[str, int] = field(default_factory=dict)


async def execute(
    uow: UnitOfWork,
    user_id: UUID,
    farm_id: UUID,
    period: str = "month",
    now: datetime | None = None,
) -> MatingStatisticsOutput:
    ensure_choice(period, PERIODS, "period")
    await ensure_farm_access(uow, farm_id, user_id)
    date_from = (now or utcnow()) - PERIODS[period]
    events = await uow.mating_events.list(farm_id, date_from=date_from)

    outcomes = Counter(e.outcome for e in events if e.outcome)
    decided = outcomes[MatingOutcome.SUCCESSFUL.value] + outcomes[MatingOutcome.UNSUCCESSFUL.value]
    success_rate = (
        round(outcomes[MatingOutcome.SUCCESSFUL.value] / decided * 100, 2) if decided else 0.0
    )
    return MatingStatisticsOutput(
        period=period,
        date_from=date_from,
        total_events=len(events),
        total_dams=sum(len(e.dam_ids) for e in events),
        success_rate=success_rate,
        by_status=dict(Counter(e.status for e in events)),
        by_outcome=dict(outcomes),
        by_type=dict(Counter(e.mating_type for e in events)),
    )
