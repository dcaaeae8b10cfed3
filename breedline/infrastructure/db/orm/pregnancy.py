from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Uuid,
    func,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from breedline.infrastructure.db.base import Base

ACTIVE_PREGNANCY_PREDICATE = "status IN ('confirmed', 'progressing') AND is_active"


class PregnancyORM(Base):
    __tablename__ = "pregnancies"
    __table_args__ = (
        # At most one active pregnancy per dam.
        Index(
            "ux_pregnancies_active_dam",
            "dam_id",
            unique=True,
            postgresql_where=text(ACTIVE_PREGNANCY_PREDICATE),
            sqlite_where=text(ACTIVE_PREGNANCY_PREDICATE),
        ),
        Index("ix_pregnancies_farm_status", "farm_id", "status"),
    )

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    farm_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("farms.id"), nullable=False
    )
    dam_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("animals.id"), nullable=False
    )
    sire_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("animals.id"), nullable=False, index=True
    )
    mating_event_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("mating_events.id"), nullable=False, index=True
    )
    conception_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    confirmed_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    expected_gestation_days: Mapped[int] = mapped_column(Integer, nullable=False)
    expected_delivery_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    status: Mapped[str] = mapped_column(String(16), nullable=False, server_default="confirmed")
    actual_delivery_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    abortion_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    termination_reason: Mapped[str | None] = mapped_column(String(16), nullable=True)
    checkups: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    complications: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON, nullable=False, default=list
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
