from __future__ import annotations

from dataclasses import asdict, fields
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from breedline.application.interfaces.repositories.animal_types import AnimalTypeRepository
from breedline.domain.models.animal_type import AnimalType, GeneticsSettings
from breedline.infrastructure.db.orm.animal_type import AnimalTypeORM

_GENETICS_FIELDS = {f.name for f in fields(GeneticsSettings)}


class AnimalTypesSQLAlchemyRepository(AnimalTypeRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: AnimalTypeORM) -> AnimalType:
        stored = orm.genetics_settings or {}
        genetics = GeneticsSettings(**{k: v for k, v in stored.items() if k in _GENETICS_FIELDS})
        return AnimalType(
            id=orm.id,
            name=orm.name,
            reproduction_enabled=orm.reproduction_enabled,
            genetics_breeding_enabled=orm.genetics_breeding_enabled,
            gestation_days=orm.gestation_days,
            genetics=genetics,
        )

    async def get(self, animal_type_id: UUID) -> AnimalType | None:
        orm = await self.session.get(AnimalTypeORM, animal_type_id)
        return self._to_domain(orm) if orm else None

    async def add(self, animal_type: AnimalType) -> AnimalType:
        orm = AnimalTypeORM(
            id=animal_type.id,
            name=animal_type.name,
            reproduction_enabled=animal_type.reproduction_enabled,
            genetics_breeding_enabled=animal_type.genetics_breeding_enabled,
            gestation_days=animal_type.gestation_days,
            genetics_settings=asdict(animal_type.genetics),
        )
        self.session.add(orm)
        await self.session.flush()
        return self._to_domain(orm)
