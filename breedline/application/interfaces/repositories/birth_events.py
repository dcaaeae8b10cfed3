from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from breedline.domain.models.birth_event import BirthEvent


class BirthEventsRepository(Protocol):
    async def add(self, event: BirthEvent) -> BirthEvent: ...

    async def update(self, event: BirthEvent) -> BirthEvent: ...

    async def get(self, event_id: UUID) -> BirthEvent | None: ...

    async def get_by_pregnancy(self, pregnancy_id: UUID) -> BirthEvent | None: ...

    async def list(
        self,
        farm_id: UUID,
        dam_id: UUID | None = None,
        sire_id: UUID | None = None,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[BirthEvent]: ...

    async def count(
        self,
        farm_id: UUID,
        dam_id: UUID | None = None,
        sire_id: UUID | None = None,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
    ) -> int: ...

    async def list_for_parent(self, animal_id: UUID) -> list[BirthEvent]: ...
