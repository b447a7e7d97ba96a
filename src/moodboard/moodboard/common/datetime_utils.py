from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional


def now_utc() -> datetime:
    """Current UTC time (naive, as stored in the database).

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def today_local() -> date:
    return datetime.now().date()


def to_iso(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.isoformat()
