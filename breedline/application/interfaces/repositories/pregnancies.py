from __future__ import annotations

from typing import Protocol
from uuid import UUID

from breedline.domain.models.pregnancy import Pregnancy


class PregnanciesRepository(Protocol):
    async def add(self, pregnancy: Pregnancy) -> Pregnancy:
        """Persist a new pregnancy.

        Raises AlreadyPregnant when the dam already holds an active pregnancy.
        """
        ...

    async def update(self, pregnancy: Pregnancy) -> Pregnancy: ...

    async def get(self, pregnancy_id: UUID) -> Pregnancy | None: ...

    async def get_active_for_dam(self, dam_id: UUID) -> Pregnancy | None: ...

    async def list_by_mating_event(self, mating_event_id: UUID) -> list[Pregnancy]: ...

    async def list(
        self,
        farm_id: UUID,
        dam_id: UUID | None = None,
        sire_id: UUID | None = None,
        status: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Pregnancy]: ...

    async def count(
        self,
        farm_id: UUID,
        dam_id: UUID | None = None,
        sire_id: UUID | None = None,
        status: str | None = None,
    ) -> int: ...

    async def list_for_parent(self, animal_id: UUID) -> list[Pregnancy]: ...
