from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from breedline.application.interfaces.unit_of_work import UnitOfWork
from breedline.application.use_cases.guards import ensure_choice, load_owned_animal
from breedline.domain.models.animal import Animal
from breedline.domain.models.offspring_tracking import OffspringTracking

ROLES = ("dam", "sire")


@dataclass(slots=True)
class ListOffspringOutput:
    parent: Animal
    items: list[OffspringTracking]
    total: int


async def execute(
    uow: UnitOfWork,
    user_id: UUID,
    parent_id: UUID,
    role: str = "dam",
    status: str | None = None,
    limit: int = 20,
    offset: int = 0,
) -> ListOffspringOutput:
    ensure_choice(role, ROLES, "role")
    parent = await load_owned_animal(uow, user_id, parent_id)
    filters = {f"{role}_id": parent.id, "status": status}
    items = await uow.offspring_tracking.list(
        parent.farm_id, limit=limit, offset=offset, **filters
    )
    total = await uow.offspring_tracking.count(parent.farm_id, **filters)
    return ListOffspringOutput(parent=parent, items=items, total=total)
