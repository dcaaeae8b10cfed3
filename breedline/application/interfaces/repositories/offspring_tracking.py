from __future__ import annotations

from typing import Protocol
from uuid import UUID

from breedline.domain.models.offspring_tracking import OffspringTracking


class OffspringTrackingRepository(Protocol):
    async def add(self, tracking: OffspringTracking) -> OffspringTracking: ...

    async def update(self, tracking: OffspringTracking) -> OffspringTracking: ...

    async def get_by_offspring(self, offspring_id: UUID) -> OffspringTracking | None: ...

    async def list(
        self,
        farm_id: UUID,
        dam_id: UUID | None = None,
        sire_id: UUID | None = None,
        status: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[OffspringTracking]: ...

    async def count(
        self,
        farm_id: UUID,
        dam_id: UUID | None = None,
        sire_id: UUID | None = None,
        status: str | None = None,
    ) -> int: ...
