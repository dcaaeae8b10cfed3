from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID


@dataclass(slots=True)
class Farm:
    id: UUID
    owner_id: UUID
    name: str
    is_active: bool = True

    def is_owned_by(self, user_id: UUID) -> bool:
        return self.is_active and self.owner_id == user_id
