from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from breedline.application.errors import ConflictError
from breedline.application.interfaces.repositories.offspring_tracking import (
    OffspringTrackingRepository,
)
from breedline.domain.models.offspring_tracking import (
    CullingDetails,
    DeathDetails,
    GrowthMeasurement,
    OffspringSnapshot,
    OffspringTracking,
    SaleDetails,
)
from breedline.infrastructure.db.codec import dump, parse_date, parse_datetime
from breedline.infrastructure.db.orm.offspring_tracking import OffspringTrackingORM
from breedline.utils.datetime_tz import as_utc


def _snapshot(data: dict[str, Any]) -> OffspringSnapshot:
    return OffspringSnapshot(
        tag=data["tag"],
        name=data.get("name"),
        gender=data["gender"],
        breed=data.get("breed"),
        birth_date=parse_date(data.get("birth_date")),
    )


def _details(cls, data: dict[str, Any] | None):
    if not data:
        return None
    values = dict(data)
    values["date"] = parse_datetime(values["date"])
    return cls(**values)


class OffspringTrackingSQLAlchemyRepository(OffspringTrackingRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: OffspringTrackingORM) -> OffspringTracking:
        return OffspringTracking(
            id=orm.id,
            farm_id=orm.farm_id,
            birth_event_id=orm.birth_event_id,
            dam_id=orm.dam_id,
            sire_id=orm.sire_id,
            offspring_id=orm.offspring_id,
            snapshot=_snapshot(orm.snapshot),
            status=orm.status,
            status_date=as_utc(orm.status_date),
            birth_weight_kg=orm.birth_weight_kg,
            weaning_weight_kg=orm.weaning_weight_kg,
            weaning_date=as_utc(orm.weaning_date),
            growth_measurements=[
                _details(GrowthMeasurement, item) for item in orm.growth_measurements or []
            ],
            sale=_details(SaleDetails, orm.sale_details),
            death=_details(DeathDetails, orm.death_details),
            culling=_details(CullingDetails, orm.culling_details),
            neonatal_health=orm.neonatal_health,
            requires_special_attention=orm.requires_special_attention,
            notes=orm.notes,
            is_active=orm.is_active,
            created_at=as_utc(orm.created_at),
            updated_at=as_utc(orm.updated_at),
            version=orm.version,
        )

    def _apply(self, orm: OffspringTrackingORM, tracking: OffspringTracking) -> None:
        orm.snapshot = dump(tracking.snapshot)
        orm.status = tracking.status
        orm.status_date = tracking.status_date
        orm.birth_weight_kg = tracking.birth_weight_kg
        orm.weaning_weight_kg = tracking.weaning_weight_kg
        orm.weaning_date = tracking.weaning_date
        orm.growth_measurements = dump(tracking.growth_measurements)
        orm.sale_details = dump(tracking.sale)
        orm.death_details = dump(tracking.death)
        orm.culling_details = dump(tracking.culling)
        orm.neonatal_health = tracking.neonatal_health
        orm.requires_special_attention = tracking.requires_special_attention
        orm.notes = tracking.notes
        orm.is_active = tracking.is_active
        orm.updated_at = tracking.updated_at
        orm.version = tracking.version

    async def add(self, tracking: OffspringTracking) -> OffspringTracking:
        orm = OffspringTrackingORM(
            id=tracking.id,
            farm_id=tracking.farm_id,
            birth_event_id=tracking.birth_event_id,
            dam_id=tracking.dam_id,
            sire_id=tracking.sire_id,
            offspring_id=tracking.offspring_id,
            created_at=tracking.created_at,
        )
        self._apply(orm, tracking)
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("Offspring is already tracked") from exc
        return self._to_domain(orm)

    async def update(self, tracking: OffspringTracking) -> OffspringTracking:
        orm = await self.session.get(OffspringTrackingORM, tracking.id)
        if not orm:
            raise ValueError(f"Offspring tracking {tracking.id} not found")
        self._apply(orm, tracking)
        await self.session.flush()
        return self._to_domain(orm)

    async def get_by_offspring(self, offspring_id: UUID) -> OffspringTracking | None:
        stmt = (
            select(OffspringTrackingORM)
            .where(OffspringTrackingORM.offspring_id == offspring_id)
            .where(OffspringTrackingORM.is_active.is_(True))
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    def _apply_filters(self, stmt, farm_id, dam_id, sire_id, status):
        stmt = stmt.where(OffspringTrackingORM.farm_id == farm_id)
        stmt = stmt.where(OffspringTrackingORM.is_active.is_(True))
        if dam_id:
            stmt = stmt.where(OffspringTrackingORM.dam_id == dam_id)
        if sire_id:
            stmt = stmt.where(OffspringTrackingORM.sire_id == sire_id)
        if status:
            stmt = stmt.where(OffspringTrackingORM.status == status)
        return stmt

    async def list(
        self,
        farm_id: UUID,
        dam_id: UUID | None = None,
        sire_id: UUID | None = None,
        status: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[OffspringTracking]:
        stmt = self._apply_filters(select(OffspringTrackingORM), farm_id, dam_id, sire_id, status)
        stmt = stmt.order_by(OffspringTrackingORM.created_at.desc()).offset(offset)
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
        stmt = select(func.count()).select_from(OffspringTrackingORM)
        stmt = self._apply_filters(stmt, farm_id, dam_id, sire_id, status)
        result = await self.session.execute(stmt)
        return int(result.scalar_one() or 0)
