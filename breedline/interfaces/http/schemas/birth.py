from __future__ import annotations

from datetime import date, datetime, timezone
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _to_utc(v: datetime | None) -> datetime | None:
    if v is None:
        return None
    if v.tzinfo is None or v.tzinfo.utcoffset(v) is None:
        return v.replace(tzinfo=timezone.utc)
    return v.astimezone(timezone.utc)


class BirthCreate(BaseModel):
    farm_id: UUID
    pregnancy_id: UUID
    dam_id: UUID
    sire_id: UUID
    birth_date: datetime
    total_offspring: int = Field(ge=0)
    live_births: int = Field(ge=0)
    stillbirths: int = Field(default=0, ge=0)
    weak_offspring: int = Field(default=0, ge=0)
    male_offspring: int = Field(default=0, ge=0)
    female_offspring: int = Field(default=0, ge=0)
    assisted_birth: bool = False
    assistance_type: str | None = None
    complications: str | None = None
    location: str | None = None
    notes: str | None = None
    birth_weight_kg: float | None = Field(default=None, gt=0)

    @field_validator("birth_date")
    def ensure_aware_utc(cls, v: datetime | None) -> datetime | None:
        return _to_utc(v)


class BirthUpdate(BaseModel):
    farm_id: UUID | None = None
    pregnancy_id: UUID | None = None
    dam_id: UUID | None = None
    sire_id: UUID | None = None
    assisted_birth: bool | None = None
    assistance_type: str | None = None
    complications: str | None = None
    location: str | None = None
    notes: str | None = None
    requires_followup: bool | None = None
    followup_date: datetime | None = None

    @field_validator("followup_date")
    def ensure_aware_utc(cls, v: datetime | None) -> datetime | None:
        return _to_utc(v)


class NeonatalDeathCreate(BaseModel):
    offspring_id: UUID
    date: datetime | None = None
    cause: str | None = None
    notes: str | None = None

    @field_validator("date")
    def ensure_aware_utc(cls, v: datetime | None) -> datetime | None:
        return _to_utc(v)


class NeonatalDeathResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    offspring_id: UUID
    date: datetime
    cause: str | None
    notes: str | None


class BirthResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    farm_id: UUID
    pregnancy_id: UUID
    dam_id: UUID
    sire_id: UUID
    birth_date: datetime
    total_offspring: int
    live_births: int
    stillbirths: int
    weak_offspring: int
    male_offspring: int
    female_offspring: int
    status: str
    assisted_birth: bool
    assistance_type: str | None
    complications: str | None
    location: str | None
    notes: str | None
    offspring_ids: list[UUID]
    neonatal_deaths: list[NeonatalDeathResponse]
    requires_followup: bool
    followup_date: datetime | None
    success_rate: float
    stillbirth_rate: float
    survival_rate: float
    gender_ratio: dict[str, float | int | None]
    created_by: UUID | None
    created_at: datetime
    updated_at: datetime
    version: int


class OffspringSummary(BaseModel):
    id: UUID
    tag: str
    name: str | None
    gender: str
    breed: str | None
    birth_date: date | None
    tracking_id: UUID


class BirthRecordedResponse(BaseModel):
    birth_event: BirthResponse
    offspring: list[OffspringSummary]


class BirthListResponse(BaseModel):
    items: list[BirthResponse]
    total: int
    limit: int
    offset: int


class DamProductionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    dam_id: UUID
    birth_events: int
    total_offspring: int
    live_births: int
    average_litter_size: float


class BirthStatisticsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    period: str
    date_from: datetime
    total_birth_events: int
    total_offspring_born: int
    total_live_births: int
    total_stillbirths: int
    average_litter_size: float
    stillbirth_rate: float
    survival_rate: float
    by_month: dict[str, int]
    top_producing_dams: list[DamProductionResponse]
