from __future__ import annotations

from typing import Protocol
from uuid import UUID

from breedline.domain.models.genetic_profile import GeneticProfile


class GeneticProfilesRepository(Protocol):
    async def get_by_animal(self, animal_id: UUID) -> GeneticProfile | None: ...

    async def save(self, profile: GeneticProfile) -> GeneticProfile:
        """Insert or replace the single profile row of `profile.animal_id`."""
        ...

    async def list_by_farm(
        self, farm_id: UUID, eligible_breeders_only: bool = False
    ) -> list[GeneticProfile]: ...
