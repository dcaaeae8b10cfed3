from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from breedline.application.interfaces.repositories.mating_events import MatingEventsRepository
from breedline.domain.models.mating_event import MatingEvent
from breedline.infrastructure.db.codec import parse_uuid
from breedline.infrastructure.db.orm.animal import AnimalORM
from breedline.infrastructure.db.orm.mating_event import MatingEventORM
from breedline.utils.datetime_tz import as_utc


class MatingEventsSQLAlchemyRepository(MatingEventsRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: MatingEventORM) -> MatingEvent:
        return MatingEvent(
            id=orm.id,
            farm_id=orm.farm_id,
            sire_id=orm.sire_id,
            dam_ids=[parse_uuid(dam_id) for dam_id in orm.dam_ids or []],
            mating_type=orm.mating_type,
            mating_date=as_utc(orm.mating_date),
            expected_conception_date=as_utc(orm.expected_conception_date),
            status=orm.status,
            outcome=orm.outcome,
            outcome_notes=orm.outcome_notes,
            location=orm.location,
            notes=orm.notes,
            created_by=orm.created_by,
            is_active=orm.is_active,
            created_at=as_utc(orm.created_at),
            updated_at=as_utc(orm.updated_at),
            version=orm.version,
        )

    async def add(self, event: MatingEvent) -> MatingEvent:
        orm = MatingEventORM(
            id=event.id,
            farm_id=event.farm_id,
            sire_id=event.sire_id,
            dam_ids=[str(dam_id) for dam_id in event.dam_ids],
            mating_type=event.mating_type,
            mating_date=event.mating_date,
            expected_conception_date=event.expected_conception_date,
            status=event.status,
            outcome=event.outcome,
            outcome_notes=event.outcome_notes,
            location=event.location,
            notes=event.notes,
            created_by=event.created_by,
            is_active=event.is_active,
            created_at=event.created_at,
            updated_at=event.updated_at,
            version=event.version,
        )
        self.session.add(orm)
        await self.session.flush()
        return self._to_domain(orm)

    async def update(self, event: MatingEvent) -> MatingEvent:
        orm = await self.session.get(MatingEventORM, event.id)
        if not orm:
            raise ValueError(f"Mating event {event.id} not found")
        orm.sire_id = event.sire_id
        orm.dam_ids = [str(dam_id) for dam_id in event.dam_ids]
        orm.mating_type = event.mating_type
        orm.mating_date = event.mating_date
        orm.expected_conception_date = event.expected_conception_date
        orm.status = event.status
        orm.outcome = event.outcome
        orm.outcome_notes = event.outcome_notes
        orm.location = event.location
        orm.notes = event.notes
        orm.is_active = event.is_active
        orm.updated_at = event.updated_at
        orm.version = event.version
        await self.session.flush()
        return self._to_domain(orm)

    async def get(self, event_id: UUID) -> MatingEvent | None:
        stmt = (
            select(MatingEventORM)
            .where(MatingEventORM.id == event_id)
            .where(MatingEventORM.is_active.is_(True))
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def _filtered(
        self,
        farm_id: UUID,
        animal_id: UUID | None,
        role: str | None,
        status: str | None,
        date_from: datetime | None,
        date_to: datetime | None,
    ) -> list[MatingEvent]:
        stmt = (
            select(MatingEventORM)
            .where(MatingEventORM.farm_id == farm_id)
            .where(MatingEventORM.is_active.is_(True))
        )
        if status:
            stmt = stmt.where(MatingEventORM.status == status)
        if date_from:
            stmt = stmt.where(MatingEventORM.mating_date >= date_from)
        if date_to:
            stmt = stmt.where(MatingEventORM.mating_date <= date_to)
        if animal_id and role == "sire":
            stmt = stmt.where(MatingEventORM.sire_id == animal_id)
        stmt = stmt.order_by(MatingEventORM.mating_date.desc())
        result = await self.session.execute(stmt)
        events = [self._to_domain(orm) for orm in result.scalars().all()]

        # Dam membership lives in a JSON array, matched here to stay dialect neutral.
        if animal_id and role == "dam":
            events = [e for e in events if animal_id in e.dam_ids]
        elif animal_id and role != "sire":
            events = [e for e in events if e.sire_id == animal_id or animal_id in e.dam_ids]
        return events

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
    ) -> list[MatingEvent]:
        events = await self._filtered(farm_id, animal_id, role, status, date_from, date_to)
        end = offset + limit if limit is not None else None
        return events[offset:end]

    async def count(
        self,
        farm_id: UUID,
        animal_id: UUID | None = None,
        role: str | None = None,
        status: str | None = None,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
    ) -> int:
        events = await self._filtered(farm_id, animal_id, role, status, date_from, date_to)
        return len(events)

    async def list_for_animal(self, animal_id: UUID) -> list[MatingEvent]:
        animal = await self.session.get(AnimalORM, animal_id)
        if animal is None:
            return []
        return await self._filtered(animal.farm_id, animal_id, None, None, None, None)
