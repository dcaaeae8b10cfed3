from __future__ import annotations

from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from breedline.application.errors import ConflictError
from breedline.application.interfaces.repositories.animals import AnimalRepository
from breedline.domain.models.animal import Animal
from breedline.infrastructure.db.orm.animal import AnimalORM
from breedline.utils.datetime_tz import as_utc, year_bounds


class AnimalsSQLAlchemyRepository(AnimalRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: AnimalORM) -> Animal:
        return Animal(
            id=orm.id,
            farm_id=orm.farm_id,
            animal_type_id=orm.animal_type_id,
            tag=orm.tag,
            gender=orm.gender,
            name=orm.name,
            breed=orm.breed,
            birth_date=orm.birth_date,
            status=orm.status,
            is_active=orm.is_active,
            reproductive_status=orm.reproductive_status,
            breeding_status=orm.breeding_status,
            health_status=orm.health_status,
            weight_kg=orm.weight_kg,
            sire_id=orm.sire_id,
            dam_id=orm.dam_id,
            birth_event_id=orm.birth_event_id,
            date_of_death=as_utc(orm.date_of_death),
            created_at=as_utc(orm.created_at),
            updated_at=as_utc(orm.updated_at),
            version=orm.version,
        )

    async def add(self, animal: Animal) -> Animal:
        orm = AnimalORM(
            id=animal.id,
            farm_id=animal.farm_id,
            animal_type_id=animal.animal_type_id,
            tag=animal.tag,
            gender=animal.gender,
            name=animal.name,
            breed=animal.breed,
            birth_date=animal.birth_date,
            status=animal.status,
            is_active=animal.is_active,
            reproductive_status=animal.reproductive_status,
            breeding_status=animal.breeding_status,
            health_status=animal.health_status,
            weight_kg=animal.weight_kg,
            sire_id=animal.sire_id,
            dam_id=animal.dam_id,
            birth_event_id=animal.birth_event_id,
            date_of_death=animal.date_of_death,
            created_at=animal.created_at,
            updated_at=animal.updated_at,
            version=animal.version,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError(
                f"Animal tag {animal.tag} already exists in farm",
                details={"tag": animal.tag},
            ) from exc
        return self._to_domain(orm)

    async def update(self, animal: Animal) -> Animal:
        orm = await self.session.get(AnimalORM, animal.id)
        if not orm:
            raise ValueError(f"Animal {animal.id} not found")
        orm.name = animal.name
        orm.breed = animal.breed
        orm.status = animal.status
        orm.is_active = animal.is_active
        orm.reproductive_status = animal.reproductive_status
        orm.breeding_status = animal.breeding_status
        orm.health_status = animal.health_status
        orm.weight_kg = animal.weight_kg
        orm.date_of_death = animal.date_of_death
        orm.updated_at = animal.updated_at
        orm.version = animal.version
        await self.session.flush()
        return self._to_domain(orm)

    async def get(self, animal_id: UUID) -> Animal | None:
        orm = await self.session.get(AnimalORM, animal_id)
        return self._to_domain(orm) if orm else None

    async def list_by_farm(
        self,
        farm_id: UUID,
        gender: str | None = None,
        animal_type_id: UUID | None = None,
        status: str | None = None,
        active_only: bool = True,
    ) -> list[Animal]:
        stmt = select(AnimalORM).where(AnimalORM.farm_id == farm_id)
        if gender:
            stmt = stmt.where(AnimalORM.gender == gender)
        if animal_type_id:
            stmt = stmt.where(AnimalORM.animal_type_id == animal_type_id)
        if status:
            stmt = stmt.where(AnimalORM.status == status)
        if active_only:
            stmt = stmt.where(AnimalORM.is_active.is_(True))
        stmt = stmt.order_by(AnimalORM.tag)
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def list_kin(self, animal: Animal) -> list[Animal]:
        shared = []
        if animal.sire_id is not None:
            shared.append(AnimalORM.sire_id == animal.sire_id)
        if animal.dam_id is not None:
            shared.append(AnimalORM.dam_id == animal.dam_id)
        if not shared:
            return []
        stmt = select(AnimalORM).where(or_(*shared)).where(AnimalORM.id != animal.id)
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def list_offspring(self, parent_id: UUID) -> list[Animal]:
        stmt = select(AnimalORM).where(
            or_(AnimalORM.sire_id == parent_id, AnimalORM.dam_id == parent_id)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def list_tags_born_in_year(self, farm_id: UUID, year: int, prefix: str) -> list[str]:
        start, end = year_bounds(year)
        stmt = (
            select(AnimalORM.tag)
            .where(AnimalORM.farm_id == farm_id)
            .where(AnimalORM.birth_date >= start)
            .where(AnimalORM.birth_date <= end)
            .where(AnimalORM.tag.startswith(prefix, autoescape=True))
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
