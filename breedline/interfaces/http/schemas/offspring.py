from __future__ import annotations

from datetime import date, datetime, timezone
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from breedline.domain.models.offspring_tracking import OffspringTracking


def _to_utc(v: datetime | None) -> datetime | None:
    if v is None:
        return None
    if v.tzinfo is None or v.tzinfo.utcoffset(v) is None:
        return v.replace(tzinfo=timezone.utc)
    return v.astimezone(timezone.utc)


class WeaningInput(BaseModel):
    date: datetime | None = None
    weight_kg: float | None = Field(default=None, gt=0)
    notes: str | None = None

    @field_validator("date")
    def ensure_aware_utc(cls, v: datetime | None) -> datetime | None:
        return _to_utc(v)


class SaleInput(BaseModel):
    date: datetime | None = None
    price: float | None = None
    buyer: str | None = None
    notes: str | None = None

    @field_validator("date")
    def ensure_aware_utc(cls, v: datetime | None) -> datetime | None:
        return _to_utc(v)


class DeathInput(BaseModel):
    date: datetime | None = None
    cause: str | None = None
    notes: str | None = None

    @field_validator("date")
    def ensure_aware_utc(cls, v: datetime | None) -> datetime | None:
        return _to_utc(v)


class CullingInput(BaseModel):
    date: datetime | None = None
    reason: str | None = None
    method: str | None = None
    notes: str | None = None

    @field_validator("date")
    def ensure_aware_utc(cls, v: datetime | None) -> datetime | None:
        return _to_utc(v)


class GrowthInput(BaseModel):
    date: datetime | None = None
    weight_kg: float | None = None
    height_cm: float | None = None
    notes: str | None = None

    @field_validator("date")
    def ensure_aware_utc(cls, v: datetime | None) -> datetime | None:
        return _to_utc(v)


class TrackingUpdate(BaseModel):
    farm_id: UUID | None = None
    birth_event_id: UUID | None = None
    dam_id: UUID | None = None
    sire_id: UUID | None = None
    offspring_id: UUID | None = None
    status: str | None = None
    status_date: datetime | None = None
    birth_weight_kg: float | None = Field(default=None, gt=0)
    neonatal_health: str | None = None
    requires_special_attention: bool | None = None
    notes: str | None = None

    @field_validator("status_date")
    def ensure_aware_utc(cls, v: datetime | None) -> datetime | None:
        return _to_utc(v)


class SnapshotResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    tag: str
    name: str | None
    gender: str
    breed: str | None
    birth_date: date | None


class GrowthMeasurementResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: datetime
    weight_kg: float | None
    height_cm: float | None
    notes: str | None


class SaleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: datetime
    price: float | None
    buyer: str | None
    notes: str | None


class DeathResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: datetime
    cause: str | None
    age_at_death_days: int | None
    notes: str | None


class CullingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: datetime
    reason: str | None
    method: str | None
    notes: str | None


class TrackingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    farm_id: UUID
    birth_event_id: UUID
    dam_id: UUID
    sire_id: UUID
    offspring_id: UUID
    snapshot: SnapshotResponse
    status: str
    status_date: datetime | None
    birth_weight_kg: float | None
    weaning_weight_kg: float | None
    weaning_date: datetime | None
    current_weight_kg: float | None
    is_weaned: bool
    age_in_days: int | None = None
    growth_measurements: list[GrowthMeasurementResponse]
    sale: SaleResponse | None
    death: DeathResponse | None
    culling: CullingResponse | None
    neonatal_health: str | None
    requires_special_attention: bool
    notes: str | None
    created_at: datetime
    updated_at: datetime
    version: int

    @classmethod
    def build(cls, tracking: OffspringTracking, now: datetime) -> TrackingResponse:
        data = cls.model_validate(tracking)
        data.age_in_days = tracking.age_in_days(now)
        return data


class OffspringListResponse(BaseModel):
    parent_id: UUID
    parent_tag: str
    role: str
    items: list[TrackingResponse]
    total: int
    limit: int
    offset: int


class OffspringStatisticsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total: int
    by_status: dict[str, int]
    by_gender: dict[str, int]
    survival_rate: float
    weaning_rate: float
    average_birth_weight_kg: float | None
    average_weaning_weight_kg: float | None
