from __future__ import annotations

from typing import Protocol
from uuid import UUID

from breedline.domain.models.animal import Animal


class AnimalRepository(Protocol):
    async def get(self, animal_id: UUID) -> Animal | None: ...

    async def add(self, animal: Animal) -> Animal: ...

    async def update(self, animal: Animal) -> Animal: ...

    async def list_by_farm(
        self,
        farm_id: UUID,
        gender: str | None = None,
        animal_type_id: UUID | None = None,
        status: str | None = None,
        active_only: bool = True,
    ) -> list[Animal]: ...

    async def list_kin(self, animal: Animal) -> list[Animal]:
        """Animals sharing the sire or the dam of `animal`, excluding itself."""
        ...

    async def list_offspring(self, parent_id: UUID) -> list[Animal]: ...

    async def list_tags_born_in_year(self, farm_id: UUID, year: int, prefix: str) -> list[str]: ...
