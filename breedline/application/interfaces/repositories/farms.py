from __future__ import annotations

from typing import Protocol
from uuid import UUID

from breedline.domain.models.farm import Farm


class FarmRepository(Protocol):
    async def get(self, farm_id: UUID) -> Farm | None: ...

    async def is_owned_by(self, farm_id: UUID, user_id: UUID) -> bool: ...
