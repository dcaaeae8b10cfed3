from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from breedline.application.errors import ConflictError
from breedline.application.interfaces.repositories.birth_events import BirthEventsRepository
from breedline.domain.models.birth_event import BirthEvent, NeonatalDeath
from breedline.infrastructure.db.codec import dump, parse_datetime, parse_uuid
from breedline.infrastructure.db.orm.birth_event import BirthEventORM
from breedline.utils.datetime_tz import as_utc


class BirthEventsSQLAlchemyRepository(BirthEventsRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: BirthEventORM) -> BirthEvent:
        return BirthEvent(
            id=orm.id,
            farm_id=orm.farm_id,
            pregnancy_id=orm.pregnancy_id,
            dam_id=orm.dam_id,
            sire_id=orm.sire_id,
            birth_date=as_utc(orm.birth_date),
            total_offspring=orm.total_offspring,
            live_births=orm.live_births,
            stillbirths=orm.stillbirths,
            weak_offspring=orm.weak_offspring,
            male_offspring=orm.male_offspring,
            female_offspring=orm.female_offspring,
            status=orm.status,
            assisted_birth=orm.assisted_birth,
            assistance_type=orm.assistance_type,
            complications=orm.complications,
            location=orm.location,
            notes=orm.notes,
            offspring_ids=[parse_uuid(item) for item in orm.offspring_ids or []],
            neonatal_deaths=[
                NeonatalDeath(
                    offspring_id=parse_uuid(item["offspring_id"]),
                    date=parse_datetime(item["date"]),
                    cause=item.get("cause"),
                    notes=item.get("notes"),
                )
                for item in orm.neonatal_deaths or []
            ],
            requires_followup=orm.requires_followup,
            followup_date=as_utc(orm.followup_date),
            is_active=orm.is_active,
            created_by=orm.created_by,
            created_at=as_utc(orm.created_at),
            updated_at=as_utc(orm.updated_at),
            version=orm.version,
        )

    def _apply(self, orm: BirthEventORM, event: BirthEvent) -> None:
        orm.birth_date = event.birth_date
        orm.total_offspring = event.total_offspring
        orm.live_births = event.live_births
        orm.stillbirths = event.stillbirths
        orm.weak_offspring = event.weak_offspring
        orm.male_offspring = event.male_offspring
        orm.female_offspring = event.female_offspring
        orm.status = event.status
        orm.assisted_birth = event.assisted_birth
        orm.assistance_type = event.assistance_type
        orm.complications = event.complications
        orm.location = event.location
        orm.notes = event.notes
        orm.offspring_ids = dump(event.offspring_ids)
        orm.neonatal_deaths = dump(event.neonatal_deaths)
        orm.requires_followup = event.requires_followup
        orm.followup_date = event.followup_date
        orm.is_active = event.is_active
        orm.updated_at = event.updated_at
        orm.version = event.version

    async def add(self, event: BirthEvent) -> BirthEvent:
        orm = BirthEventORM(
            id=event.id,
            farm_id=event.farm_id,
            pregnancy_id=event.pregnancy_id,
            dam_id=event.dam_id,
            sire_id=event.sire_id,
            created_by=event.created_by,
            created_at=event.created_at,
        )
        self._apply(orm, event)
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("A birth has already been recorded for this pregnancy") from exc
        return self._to_domain(orm)

    async def update(self, event: BirthEvent) -> BirthEvent:
        orm = await self.session.get(BirthEventORM, event.id)
        if not orm:
            raise ValueError(f"Birth event {event.id} not found")
        self._apply(orm, event)
        await self.session.flush()
        return self._to_domain(orm)

    async def get(self, event_id: UUID) -> BirthEvent | None:
        stmt = (
            select(BirthEventORM)
            .where(BirthEventORM.id == event_id)
            .where(BirthEventORM.is_active.is_(True))
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def get_by_pregnancy(self, pregnancy_id: UUID) -> BirthEvent | None:
        stmt = select(BirthEventORM).where(BirthEventORM.pregnancy_id == pregnancy_id)
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    def _apply_filters(self, stmt, farm_id, dam_id, sire_id, date_from, date_to):
        stmt = stmt.where(BirthEventORM.farm_id == farm_id)
        stmt = stmt.where(BirthEventORM.is_active.is_(True))
        if dam_id:
            stmt = stmt.where(BirthEventORM.dam_id == dam_id)
        if sire_id:
            stmt = stmt.where(BirthEventORM.sire_id == sire_id)
        if date_from:
            stmt = stmt.where(BirthEventORM.birth_date >= date_from)
        if date_to:
            stmt = stmt.where(BirthEventORM.birth_date <= date_to)
        return stmt

    async def list(
        self,
        farm_id: UUID,
        dam_id: UUID | None = None,
        sire_id: UUID | None = None,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[BirthEvent]:
        stmt = self._apply_filters(
            select(BirthEventORM), farm_id, dam_id, sire_id, date_from, date_to
        )
        stmt = stmt.order_by(BirthEventORM.birth_date.desc()).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def count(
        self,
        farm_id: UUID,
        dam_id: UUID | None = None,
        sire_id: UUID | None = None,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
    ) -> int:
        stmt = select(func.count()).select_from(BirthEventORM)
        stmt = self._apply_filters(stmt, farm_id, dam_id, sire_id, date_from, date_to)
        result = await self.session.execute(stmt)
        return int(result.scalar_one() or 0)

    async def list_for_parent(self, animal_id: UUID) -> list[BirthEvent]:
        stmt = select(BirthEventORM).where(
            or_(BirthEventORM.dam_id == animal_id, BirthEventORM.sire_id == animal_id)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]
