from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from breedline.domain.models.pregnancy import Pregnancy


def _to_utc(v: datetime | None) -> datetime | None:
    if v is None:
        return None
    if v.tzinfo is None or v.tzinfo.utcoffset(v) is None:
        return v.replace(tzinfo=timezone.utc)
    return v.astimezone(timezone.utc)


class PregnancyCreate(BaseModel):
    farm_id: UUID
    dam_id: UUID
    sire_id: UUID
    mating_event_id: UUID
    conception_date: datetime
    expected_gestation_days: int | None = None
    notes: str | None = None

    @field_validator("conception_date")
    def ensure_aware_utc(cls, v: datetime | None) -> datetime | None:
        return _to_utc(v)


class PregnancyUpdate(BaseModel):
    farm_id: UUID | None = None
    dam_id: UUID | None = None
    sire_id: UUID | None = None
    mating_event_id: UUID | None = None
    conception_date: datetime | None = None
    expected_gestation_days: int | None = None
    notes: str | None = None

    @field_validator("conception_date")
    def ensure_aware_utc(cls, v: datetime | None) -> datetime | None:
        return _to_utc(v)


class TerminateInput(BaseModel):
    status: str  # aborted, failed
    reason: str = "unknown"
    notes: str | None = None
    date: datetime | None = None

    @field_validator("date")
    def ensure_aware_utc(cls, v: datetime | None) -> datetime | None:
        return _to_utc(v)


class CheckupInput(BaseModel):
    date: datetime | None = None
    weight_kg: float | None = None
    examiner: str | None = None
    findings: str | None = None
    notes: str | None = None

    @field_validator("date")
    def ensure_aware_utc(cls, v: datetime | None) -> datetime | None:
        return _to_utc(v)


class ComplicationInput(BaseModel):
    type: str
    description: str | None = None
    severity: str = "mild"
    treatment: str | None = None
    resolved: bool = False
    date: datetime | None = None

    @field_validator("date")
    def ensure_aware_utc(cls, v: datetime | None) -> datetime | None:
        return _to_utc(v)


class CheckupResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: datetime
    weight_kg: float | None
    examiner: str | None
    findings: str | None
    notes: str | None


class ComplicationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: datetime
    type: str
    description: str | None
    severity: str
    treatment: str | None
    resolved: bool


class PregnancyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    farm_id: UUID
    dam_id: UUID
    sire_id: UUID
    mating_event_id: UUID
    conception_date: datetime
    confirmed_date: datetime
    expected_gestation_days: int
    expected_delivery_date: datetime
    status: str
    actual_delivery_date: datetime | None
    abortion_date: datetime | None
    termination_reason: str | None
    checkups: list[CheckupResponse]
    complications: list[ComplicationResponse]
    notes: str | None
    days_pregnant: int = 0
    days_remaining: int = 0
    gestation_progress: int = 0
    is_overdue: bool = False
    created_at: datetime
    updated_at: datetime
    version: int

    @classmethod
    def build(cls, pregnancy: Pregnancy, now: datetime) -> PregnancyResponse:
        data = cls.model_validate(pregnancy)
        data.days_pregnant = pregnancy.days_pregnant(now)
        data.days_remaining = pregnancy.days_remaining(now)
        data.gestation_progress = pregnancy.gestation_progress(now)
        data.is_overdue = pregnancy.is_overdue(now)
        return data


class PregnancyListResponse(BaseModel):
    items: list[PregnancyResponse]
    total: int
    limit: int
    offset: int


class PregnancyAlertsResponse(BaseModel):
    due_soon: list[PregnancyResponse]
    overdue: list[PregnancyResponse]
    with_complications: list[PregnancyResponse]
