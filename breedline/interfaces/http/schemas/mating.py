from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from breedline.interfaces.http.schemas.pregnancy import PregnancyResponse


def _to_utc(v: datetime | None) -> datetime | None:
    if v is None:
        return None
    if v.tzinfo is None or v.tzinfo.utcoffset(v) is None:
        return v.replace(tzinfo=timezone.utc)
    return v.astimezone(timezone.utc)


class MatingCreate(BaseModel):
    farm_id: UUID
    sire_id: UUID
    dam_ids: list[UUID] = Field(min_length=1)
    mating_date: datetime
    mating_type: str = "natural"
    expected_conception_date: datetime | None = None
    location: str | None = None
    notes: str | None = None

    @field_validator("mating_date", "expected_conception_date")
    def ensure_aware_utc(cls, v: datetime | None) -> datetime | None:
        return _to_utc(v)


class MatingUpdate(BaseModel):
    farm_id: UUID | None = None
    sire_id: UUID | None = None
    dam_ids: list[UUID] | None = None
    mating_type: str | None = None
    mating_date: datetime | None = None
    expected_conception_date: datetime | None = None
    status: str | None = None
    location: str | None = None
    notes: str | None = None

    @field_validator("mating_date", "expected_conception_date")
    def ensure_aware_utc(cls, v: datetime | None) -> datetime | None:
        return _to_utc(v)


class MatingOutcomeInput(BaseModel):
    outcome: str  # successful, unsuccessful, unknown
    notes: str | None = None


class MatingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    farm_id: UUID
    sire_id: UUID
    dam_ids: list[UUID]
    mating_type: str
    mating_date: datetime
    expected_conception_date: datetime | None
    status: str
    outcome: str | None
    outcome_notes: str | None
    location: str | None
    notes: str | None
    created_by: UUID | None
    created_at: datetime
    updated_at: datetime
    version: int


class MatingOutcomeResponse(BaseModel):
    mating_event: MatingResponse
    pregnancies: list[PregnancyResponse]


class MatingListResponse(BaseModel):
    items: list[MatingResponse]
    total: int
    limit: int
    offset: int


class MatingStatisticsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    period: str
    date_from: datetime
    total_events: int
    total_dams: int
    success_rate: float
    by_status: dict[str, int]
    by_outcome: dict[str, int]
    by_type: dict[str, int]
