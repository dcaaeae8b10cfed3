from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import JSON, Boolean, DateTime, Float, ForeignKey, Integer, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from breedline.infrastructure.db.base import Base


class GeneticProfileORM(Base):
    __tablename__ = "genetic_profiles"

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    animal_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("animals.id"), nullable=False, unique=True
    )
    farm_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("farms.id"), nullable=False, index=True
    )
    animal_type_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    gender: Mapped[str] = mapped_column(String(16), nullable=False)

    # Queryable copies of breeding_profile fields.
    is_breeder: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default="false")
    eligibility: Mapped[str] = mapped_column(String(16), nullable=False)

    breeding_profile: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    performance_metrics: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    traits: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    inbreeding_coefficient: Mapped[float] = mapped_column(
        Float, nullable=False, server_default="0"
    )
    known_close_relatives: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON, nullable=False, default=list
    )
    recommended_pairs: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON, nullable=False, default=list
    )
    avoid_pairs: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    pedigree_generation: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    pedigree: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    computed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
