"""Gym clock in/out routes."""
import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from healfit.config import get_settings
from healfit.models.base import get_db, utcnow
from healfit.models.profile import Profile
from healfit.models.tracking import EntryType, TimeLog
from healfit.schemas.tracking import (
    AttendanceResponse,
    EntryCreate,
    EntryResponse,
    EntryStatus,
    SessionSummary,
    TimeLogResponse,
)
from healfit.services import profile_service
from healfit.services.time_tracking import (
    ClockEvent,
    day_bounds,
    haversine_m,
    parse_location,
    session_minutes,
)
from healfit.utils.auth import get_current_user, require_admin
from healfit.utils.phone import phone_param

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(prefix="/api/entry", tags=["Time Clock"])


def _to_log_response(log: TimeLog) -> TimeLogResponse:
    return TimeLogResponse(
        id=log.id,
        user_id=log.user_phone,
        role=log.role,
        type=log.type,
        timestamp=log.timestamp,
        location=log.location,
    )


def _ensure_self_or_admin(current_user: Profile, phone: str) -> None:
    if current_user.phone != phone and not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not allowed to access this user",
        )


def _check_geofence(location: Optional[str]) -> None:
    """Reject clock events recorded away from the gym."""
    coords = parse_location(location)
    if coords is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Valid location required (lat:<float>,lng:<float>)",
        )

    distance = haversine_m(*coords, settings.gym_latitude, settings.gym_longitude)
    if distance > settings.entry_radius_m:
        logger.warning(f"Clock event rejected {distance:.0f} m from the gym")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You must be at the gym to clock in or out",
        )


async def _latest_event(db: AsyncSession, phone: str) -> Optional[TimeLog]:
    result = await db.execute(
        select(TimeLog)
        .where(TimeLog.user_phone == phone)
        .order_by(TimeLog.timestamp.desc(), TimeLog.id.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


@router.post("", response_model=EntryResponse, status_code=status.HTTP_201_CREATED)
async def record_entry(
    entry: EntryCreate,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(get_current_user),
):
    """
    Clock in or out.

    The event is stamped with the server time and the profile's role.
    """
    _ensure_self_or_admin(current_user, entry.user_id)

    profile = await profile_service.get_by_phone(db, entry.user_id)
    if not profile:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )

    if settings.entry_geofence_enabled:
        _check_geofence(entry.location)

    latest = await _latest_event(db, entry.user_id)
    if latest and latest.type == entry.type:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Already clocked {entry.type.value}",
        )

    log = TimeLog(
        user_phone=profile.phone,
        role=profile.role.value,
        type=entry.type,
        timestamp=utcnow(),
        location=entry.location,
    )
    db.add(log)
    await db.flush()

    logger.info(f"{profile.phone} clocked {entry.type.value}")
    return EntryResponse(timestamp=log.timestamp)


@router.get("/status", response_model=EntryStatus)
async def get_entry_status(
    user_id: str = Query(...),
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(get_current_user),
):
    """Latest clock event of a user."""
    phone = phone_param(user_id)
    _ensure_self_or_admin(current_user, phone)

    latest = await _latest_event(db, phone)
    if not latest:
        return EntryStatus()
    return EntryStatus(type=latest.type, timestamp=latest.timestamp)


@router.get("/logs", response_model=List[TimeLogResponse])
async def get_entry_logs(
    user_id: Optional[str] = Query(None),
    role: Optional[str] = Query(None),
    day: Optional[date] = Query(None, alias="date"),
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(get_current_user),
):
    """
    List clock events, newest first.

    Non-admins only ever see their own events.
    """
    query = select(TimeLog)

    if not current_user.is_admin:
        query = query.where(TimeLog.user_phone == current_user.phone)
    if user_id:
        query = query.where(TimeLog.user_phone == phone_param(user_id))
    if role:
        query = query.where(TimeLog.role == role)
    if day:
        start, end = day_bounds(day)
        query = query.where(and_(TimeLog.timestamp >= start, TimeLog.timestamp < end))

    result = await db.execute(query.order_by(TimeLog.timestamp.desc(), TimeLog.id.desc()))
    return [_to_log_response(log) for log in result.scalars().all()]


@router.get("/attendance", response_model=AttendanceResponse)
async def get_attendance(
    day: Optional[date] = Query(None, alias="date"),
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(require_admin),
):
    """Who came in on a day and how long they stayed."""
    day = day or utcnow().date()
    start, end = day_bounds(day)

    result = await db.execute(
        select(TimeLog).where(and_(TimeLog.timestamp >= start, TimeLog.timestamp < end))
    )
    logs = result.scalars().all()

    minutes = session_minutes(
        [ClockEvent(user_phone=log.user_phone, type=log.type, timestamp=log.timestamp) for log in logs],
        day,
    )
    present = sorted({log.user_phone for log in logs if log.type == EntryType.IN})

    result = await db.execute(select(Profile.phone).order_by(Profile.phone))
    absent = [phone for phone in result.scalars().all() if phone not in present]

    return AttendanceResponse(
        date=day,
        present=present,
        absent=absent,
        sessions=[
            SessionSummary(user_id=phone, minutes=minutes.get(phone, 0))
            for phone in present
        ],
    )
