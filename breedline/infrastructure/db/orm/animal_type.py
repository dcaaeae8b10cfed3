from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import JSON, Boolean, DateTime, Integer, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from breedline.infrastructure.db.base import Base


class AnimalTypeORM(Base):
    __tablename__ = "animal_types"

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False, unique=True)
    reproduction_enabled: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default="false"
    )
    genetics_breeding_enabled: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default="false"
    )
    gestation_days: Mapped[int | None] = mapped_column(Integer, nullable=True)
    genetics_settings: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
