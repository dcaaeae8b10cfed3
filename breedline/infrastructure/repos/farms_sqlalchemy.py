from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from breedline.application.interfaces.repositories.farms import FarmRepository
from breedline.domain.models.farm import Farm
from breedline.infrastructure.db.orm.farm import FarmORM


class FarmsSQLAlchemyRepository(FarmRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: FarmORM) -> Farm:
        return Farm(id=orm.id, owner_id=orm.owner_id, name=orm.name, is_active=orm.is_active)

    async def get(self, farm_id: UUID) -> Farm | None:
        orm = await self.session.get(FarmORM, farm_id)
        return self._to_domain(orm) if orm else None

    async def is_owned_by(self, farm_id: UUID, user_id: UUID) -> bool:
        stmt = (
            select(FarmORM.id)
            .where(FarmORM.id == farm_id)
            .where(FarmORM.owner_id == user_id)
            .where(FarmORM.is_active.is_(True))
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def add(self, farm: Farm) -> Farm:
        orm = FarmORM(id=farm.id, owner_id=farm.owner_id, name=farm.name, is_active=farm.is_active)
        self.session.add(orm)
        await self.session.flush()
        return self._to_domain(orm)
