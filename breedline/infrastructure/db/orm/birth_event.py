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
)
from sqlalchemy.orm import Mapped, mapped_column

from breedline.infrastructure.db.base import Base


class BirthEventORM(Base):
    __tablename__ = "birth_events"
    __table_args__ = (Index("ix_birth_events_farm_date", "farm_id", "birth_date"),)

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    farm_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("farms.id"), nullable=False
    )
    pregnancy_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("pregnancies.id"), nullable=False, unique=True
    )
    dam_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("animals.id"), nullable=False, index=True
    )
    sire_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("animals.id"), nullable=False, index=True
    )
    birth_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    total_offspring: Mapped[int] = mapped_column(Integer, nullable=False)
    live_births: Mapped[int] = mapped_column(Integer, nullable=False)
    stillbirths: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    weak_offspring: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    male_offspring: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    female_offspring: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")

    status: Mapped[str] = mapped_column(String(16), nullable=False, server_default="in_progress")
    assisted_birth: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default="false")
    assistance_type: Mapped[str | None] = mapped_column(String(128), nullable=True)
    complications: Mapped[str | None] = mapped_column(Text, nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    offspring_ids: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    neonatal_deaths: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON, nullable=False, default=list
    )
    requires_followup: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default="false"
    )
    followup_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default="true")
    created_by: Mapped[UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
