from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from breedline.infrastructure.db.base import Base


class OffspringTrackingORM(Base):
    __tablename__ = "offspring_tracking"
    __table_args__ = (Index("ix_offspring_tracking_farm_status", "farm_id", "status"),)

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    farm_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("farms.id"), nullable=False
    )
    birth_event_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("birth_events.id"), nullable=False, index=True
    )
    dam_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    sire_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    offspring_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("animals.id"), nullable=False, unique=True
    )
    snapshot: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)

    status: Mapped[str] = mapped_column(String(16), nullable=False, server_default="alive")
    status_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    birth_weight_kg: Mapped[float | None] = mapped_column(Float, nullable=True)
    weaning_weight_kg: Mapped[float | None] = mapped_column(Float, nullable=True)
    weaning_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    growth_measurements: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON, nullable=False, default=list
    )
    sale_details: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    death_details: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    culling_details: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    neonatal_health: Mapped[str | None] = mapped_column(String(64), nullable=True)
    requires_special_attention: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default="false"
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default="true")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
