"""JSON column helpers for the nested value objects stored inline on rows."""

from __future__ import annotations

from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from typing import Any
from uuid import UUID

from breedline.utils.datetime_tz import as_utc


def dump(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return dump(asdict(value))
    if isinstance(value, dict):
        return {key: dump(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [dump(item) for item in value]
    if isinstance(value, datetime):
        return as_utc(value).isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    return value


def parse_datetime(value: str | None) -> datetime | None:
    if not value:
        return None
    return as_utc(datetime.fromisoformat(value))


def parse_date(value: str | None) -> date | None:
    return date.fromisoformat(value) if value else None


def parse_uuid(value: str | None) -> UUID | None:
    return UUID(value) if value else None
