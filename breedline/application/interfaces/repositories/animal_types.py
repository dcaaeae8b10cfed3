from __future__ import annotations

from typing import Protocol
from uuid import UUID

from breedline.domain.models.animal_type import AnimalType


class AnimalTypeRepository(Protocol):
    async def get(self, animal_type_id: UUID) -> AnimalType | None: ...
