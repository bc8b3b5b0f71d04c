"""Clock in/out helpers: geofencing and session totals."""
import math
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Iterable, Optional

from healfit.models.tracking import EntryType

EARTH_RADIUS_M = 6371e3

_LOCATION_RE = re.compile(
    r"^\s*lat:\s*(?P<lat>-?\d+(?:\.\d+)?)\s*,\s*lng:\s*(?P<lng>-?\d+(?:\.\d+)?)\s*$"
)


@dataclass
class ClockEvent:
    """Minimal view of a time log used for session math."""
    user_phone: str
    type: EntryType
    timestamp: datetime


def parse_location(location: Optional[str]) -> Optional[tuple[float, float]]:
    """Parse a ``lat:<float>,lng:<float>`` string into coordinates."""
    if not location:
        return None
    match = _LOCATION_RE.match(location)
    if not match:
        return None
    lat, lng = float(match["lat"]), float(match["lng"])
    if not (-90 <= lat <= 90 and -180 <= lng <= 180):
        return None
    return lat, lng


def haversine_m(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance between two points in meters."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)

    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """UTC start (inclusive) and end (exclusive) of a calendar day."""
    start = datetime.combine(day, time.min, tzinfo=timezone.utc)
    return start, start + timedelta(days=1)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def session_minutes(
    events: Iterable[ClockEvent],
    day: date,
    now: Optional[datetime] = None,
) -> dict[str, int]:
    """
    Total minutes spent clocked in per user on a day.

    Each ``in`` is paired with the next ``out`` of the same user. An ``in``
    without a matching ``out`` counts until the end of the day or ``now``,
    whichever comes first. Stray ``out`` events are ignored.

    Args:
        events: Clock events for the day (any order)
        day: The calendar day being summarized
        now: Current time (defaults to UTC now)

    Returns:
        Mapping of user phone to whole minutes
    """
    now = _as_utc(now or datetime.now(timezone.utc))
    _, day_end = day_bounds(day)
    open_until = min(day_end, now)

    totals: dict[str, float] = {}
    open_since: dict[str, datetime] = {}

    for event in sorted(events, key=lambda e: _as_utc(e.timestamp)):
        stamp = _as_utc(event.timestamp)
        totals.setdefault(event.user_phone, 0.0)

        if event.type == EntryType.IN:
            open_since.setdefault(event.user_phone, stamp)
        elif event.user_phone in open_since:
            started = open_since.pop(event.user_phone)
            totals[event.user_phone] += (stamp - started).total_seconds()

    for phone, started in open_since.items():
        if open_until > started:
            totals[phone] += (open_until - started).total_seconds()

    return {phone: int(seconds // 60) for phone, seconds in totals.items()}
