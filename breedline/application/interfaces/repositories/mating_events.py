from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from breedline.domain.models.mating_event import MatingEvent


class MatingEventsRepository(Protocol):
    async def add(self, event: MatingEvent) -> MatingEvent: ...

    async def update(self, event: MatingEvent) -> MatingEvent: ...

    async def get(self, event_id: UUID) -> MatingEvent | None: ...

    async def list(
        self,
        farm_id: UUID,
        animal_id: UUID | None = None,
        role: str | None = None,
        status: str | None = None,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[MatingEvent]: ...

    async def count(
        self,
        farm_id: UUID,
        animal_id: UUID | None = None,
        role: str | None = None,
        status: str | None = None,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
    ) -> int: ...

    async def list_for_animal(self, animal_id: UUID) -> list[MatingEvent]:
        """Active events the animal took part in, as sire or as dam."""
        ...
