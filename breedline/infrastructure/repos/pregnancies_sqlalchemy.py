from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from breedline.application.errors import AlreadyPregnant
from breedline.application.interfaces.repositories.pregnancies import PregnanciesRepository
from breedline.domain.models.pregnancy import (
    ACTIVE_STATUSES,
    Pregnancy,
    PregnancyCheckup,
    PregnancyComplication,
)
from breedline.infrastructure.db.codec import dump, parse_datetime
from breedline.infrastructure.db.orm.pregnancy import PregnancyORM
from breedline.utils.datetime_tz import as_utc


def _checkup(data: dict[str, Any]) -> PregnancyCheckup:
    return PregnancyCheckup(
        date=parse_datetime(data["date"]),
        weight_kg=data.get("weight_kg"),
        examiner=data.get("examiner"),
        findings=data.get("findings"),
        notes=data.get("notes"),
    )


def _complication(data: dict[str, Any]) -> PregnancyComplication:
    return PregnancyComplication(
        date=parse_datetime(data["date"]),
        type=data["type"],
        description=data.get("description"),
        severity=data.get("severity", "mild"),
        treatment=data.get("treatment"),
        resolved=bool(data.get("resolved", False)),
    )


class PregnanciesSQLAlchemyRepository(PregnanciesRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: PregnancyORM) -> Pregnancy:
        return Pregnancy(
            id=orm.id,
            farm_id=orm.farm_id,
            dam_id=orm.dam_id,
            sire_id=orm.sire_id,
            mating_event_id=orm.mating_event_id,
            conception_date=as_utc(orm.conception_date),
            confirmed_date=as_utc(orm.confirmed_date),
            expected_gestation_days=orm.expected_gestation_days,
            expected_delivery_date=as_utc(orm.expected_delivery_date),
            status=orm.status,
            actual_delivery_date=as_utc(orm.actual_delivery_date),
            abortion_date=as_utc(orm.abortion_date),
            termination_reason=orm.termination_reason,
            checkups=[_checkup(item) for item in orm.checkups or []],
            complications=[_complication(item) for item in orm.complications or []],
            notes=orm.notes,
            is_active=orm.is_active,
            created_at=as_utc(orm.created_at),
            updated_at=as_utc(orm.updated_at),
            version=orm.version,
        )

    async def add(self, pregnancy: Pregnancy) -> Pregnancy:
        orm = PregnancyORM(
            id=pregnancy.id,
            farm_id=pregnancy.farm_id,
            dam_id=pregnancy.dam_id,
            sire_id=pregnancy.sire_id,
            mating_event_id=pregnancy.mating_event_id,
            conception_date=pregnancy.conception_date,
            confirmed_date=pregnancy.confirmed_date,
            expected_gestation_days=pregnancy.expected_gestation_days,
            expected_delivery_date=pregnancy.expected_delivery_date,
            status=pregnancy.status,
            actual_delivery_date=pregnancy.actual_delivery_date,
            abortion_date=pregnancy.abortion_date,
            termination_reason=pregnancy.termination_reason,
            checkups=dump(pregnancy.checkups),
            complications=dump(pregnancy.complications),
            notes=pregnancy.notes,
            is_active=pregnancy.is_active,
            created_at=pregnancy.created_at,
            updated_at=pregnancy.updated_at,
            version=pregnancy.version,
        )
        # The savepoint keeps the outer transaction usable when the
        # one-active-pregnancy index rejects the row.
        try:
            async with self.session.begin_nested():
                self.session.add(orm)
        except IntegrityError as exc:
            raise AlreadyPregnant(
                f"Dam {pregnancy.dam_id} already has an active pregnancy",
                details={"dam_id": str(pregnancy.dam_id)},
            ) from exc
        return self._to_domain(orm)

    async def update(self, pregnancy: Pregnancy) -> Pregnancy:
        orm = await self.session.get(PregnancyORM, pregnancy.id)
        if not orm:
            raise ValueError(f"Pregnancy {pregnancy.id} not found")
        orm.conception_date = pregnancy.conception_date
        orm.confirmed_date = pregnancy.confirmed_date
        orm.expected_gestation_days = pregnancy.expected_gestation_days
        orm.expected_delivery_date = pregnancy.expected_delivery_date
        orm.status = pregnancy.status
        orm.actual_delivery_date = pregnancy.actual_delivery_date
        orm.abortion_date = pregnancy.abortion_date
        orm.termination_reason = pregnancy.termination_reason
        orm.checkups = dump(pregnancy.checkups)
        orm.complications = dump(pregnancy.complications)
        orm.notes = pregnancy.notes
        orm.is_active = pregnancy.is_active
        orm.updated_at = pregnancy.updated_at
        orm.version = pregnancy.version
        await self.session.flush()
        return self._to_domain(orm)

    async def get(self, pregnancy_id: UUID) -> Pregnancy | None:
        orm = await self.session.get(PregnancyORM, pregnancy_id)
        return self._to_domain(orm) if orm else None

    async def get_active_for_dam(self, dam_id: UUID) -> Pregnancy | None:
        stmt = (
            select(PregnancyORM)
            .where(PregnancyORM.dam_id == dam_id)
            .where(PregnancyORM.status.in_(ACTIVE_STATUSES))
            .where(PregnancyORM.is_active.is_(True))
        )
        result = await self.session.execute(stmt)
        orm = result.scalars().first()
        return self._to_domain(orm) if orm else None

    async def list_by_mating_event(self, mating_event_id: UUID) -> list[Pregnancy]:
        stmt = (
            select(PregnancyORM)
            .where(PregnancyORM.mating_event_id == mating_event_id)
            .where(PregnancyORM.is_active.is_(True))
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    def _apply_filters(self, stmt, farm_id, dam_id, sire_id, status):
        stmt = stmt.where(PregnancyORM.farm_id == farm_id)
        stmt = stmt.where(PregnancyORM.is_active.is_(True))
        if dam_id:
            stmt = stmt.where(PregnancyORM.dam_id == dam_id)
        if sire_id:
            stmt = stmt.where(PregnancyORM.sire_id == sire_id)
        if status:
            stmt = stmt.where(PregnancyORM.status == status)
        return stmt

    async def list(
        self,
        farm_id: UUID,
        dam_id: UUID | None = None,
        sire_id: UUID | None = None,
        status: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Pregnancy]:
        stmt = self._apply_filters(select(PregnancyORM), farm_id, dam_id, sire_id, status)
        stmt = stmt.order_by(PregnancyORM.expected_delivery_date).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def count(
        self,
        farm_id: UUID,
        dam_id: UUID | None = None,
        sire_id: UUID | None = None,
        status: str | None = None,
    ) -> int:
        stmt = select(func.count()).select_from(PregnancyORM)
        stmt = self._apply_filters(stmt, farm_id, dam_id, sire_id, status)
        result = await self.session.execute(stmt)
        return int(result.scalar_one() or 0)

    async def list_for_parent(self, animal_id: UUID) -> list[Pregnancy]:
        stmt = select(PregnancyORM).where(
            or_(PregnancyORM.dam_id == animal_id, PregnancyORM.sire_id == animal_id)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]
