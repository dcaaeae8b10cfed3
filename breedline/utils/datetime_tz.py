from __future__ import annotations

from datetime import date, datetime, timezone


def as_utc(dt: datetime | None) -> datetime | None:
    """Attach UTC to naive values read back from the database.

    SQLite drops offsets on `DateTime(timezone=True)` columns; every value is
    written in UTC so a naive one can be tagged without shifting it.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def year_bounds(year: int) -> tuple[date, date]:
    return date(year, 1, 1), date(year, 12, 31)
