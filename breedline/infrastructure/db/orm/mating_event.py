from __future__ import annotations

from datetime import datetime
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


class MatingEventORM(Base):
    __tablename__ = "mating_events"
    __table_args__ = (
        Index("ix_mating_events_farm_date", "farm_id", "mating_date"),
        Index("ix_mating_events_farm_sire", "farm_id", "sire_id"),
    )

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    farm_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("farms.id"), nullable=False
    )
    sire_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("animals.id"), nullable=False
    )
    # Dam ids as strings; the set is small and always read whole.
    dam_ids: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    mating_type: Mapped[str] = mapped_column(String(32), nullable=False)
    mating_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    expected_conception_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    status: Mapped[str] = mapped_column(String(16), nullable=False, server_default="planned")
    outcome: Mapped[str | None] = mapped_column(String(16), nullable=True)
    outcome_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default="true")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
