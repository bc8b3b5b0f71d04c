"""Profile and onboarding routes."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from healfit.config import get_settings
from healfit.models.base import get_db
from healfit.models.profile import Profile, Role, generate_public_id
from healfit.schemas.profile import (
    ProfileCompleteness,
    ProfilePublic,
    ProfileResponse,
    ProfileSaveResponse,
    ProfileUpsert,
    UsernameCheck,
)
from healfit.services import profile_service
from healfit.utils.auth import ensure_can_access, get_current_user, get_current_user_optional
from healfit.utils.phone import normalize_phone

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(prefix="/api/profile", tags=["Profile"])


def _check_password_length(password: Optional[str]) -> None:
    if password is not None and len(password) < settings.password_min_length:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Password must be at least {settings.password_min_length} characters",
        )


async def _ensure_unique(
    db: AsyncSession,
    username: Optional[str],
    email: Optional[str],
    exclude_phone: Optional[str] = None,
) -> None:
    conflict = await profile_service.find_conflict(db, username, email, exclude_phone)
    if conflict == "username":
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already taken")
    if conflict == "email":
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered")


@router.post("", response_model=ProfileSaveResponse)
async def save_profile(
    profile_data: ProfileUpsert,
    db: AsyncSession = Depends(get_db),
    current_user: Optional[Profile] = Depends(get_current_user_optional),
):
    """
    Create or update a profile keyed by phone.

    Signup and onboarding create profiles without authentication. Updating
    an existing profile needs a token for that phone or an admin token.
    Only the fields present in the body are changed.
    """
    _check_password_length(profile_data.password)
    profile = await profile_service.get_by_phone(db, profile_data.phone)

    updates = profile_data.model_dump(exclude_unset=True, exclude={"phone", "id"})

    if profile:
        if not current_user or not (current_user.phone == profile.phone or current_user.is_admin):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Phone number already registered. Please log in.",
            )
        await _ensure_unique(db, profile_data.username, profile_data.email, exclude_phone=profile.phone)
        profile_service.apply_updates(profile, updates)
        await db.flush()
        logger.info(f"Profile {profile.phone} updated")
        return ProfileSaveResponse(id=profile.id)

    if not profile_data.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Password is required",
        )

    await _ensure_unique(db, profile_data.username, profile_data.email)

    profile = Profile(
        phone=profile_data.phone,
        id=profile_data.id or generate_public_id(),
        role=Role.USER,
    )
    profile_service.apply_updates(profile, updates)
    db.add(profile)
    await db.flush()

    logger.info(f"Profile {profile.phone} created")
    return ProfileSaveResponse(id=profile.id)


@router.get("/phone/{phone}", response_model=Optional[ProfilePublic])
async def get_profile_by_phone(
    phone: str,
    db: AsyncSession = Depends(get_db),
):
    """Registration check by phone. Returns null when unknown."""
    normalized = normalize_phone(phone)
    if not normalized:
        return None
    profile = await profile_service.get_by_phone(db, normalized)
    return profile_service.to_public(profile) if profile else None


@router.get("/email/{email}", response_model=Optional[ProfilePublic])
async def get_profile_by_email(
    email: str,
    db: AsyncSession = Depends(get_db),
):
    """Registration check by email. Returns null when unknown."""
    result = await db.execute(select(Profile).where(Profile.email == email.strip().lower()))
    profile = result.scalar_one_or_none()
    return profile_service.to_public(profile) if profile else None


@router.get("/username/{username}", response_model=UsernameCheck)
async def check_username(
    username: str,
    db: AsyncSession = Depends(get_db),
):
    """Check whether a username is taken."""
    result = await db.execute(select(Profile.phone).where(Profile.username == username))
    return UsernameCheck(exists=result.first() is not None)


@router.get("/{phone}/completeness", response_model=ProfileCompleteness)
async def get_profile_completeness(
    phone: str,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(get_current_user),
):
    """Check whether onboarding collected everything the plans need."""
    profile = await _load_profile(db, phone)
    ensure_can_access(current_user, profile.phone)

    missing = profile_service.missing_onboarding_fields(profile)
    total = len(profile_service.ONBOARDING_FIELDS)

    return ProfileCompleteness(
        is_complete=not missing,
        missing_fields=missing,
        completion_percent=round((total - len(missing)) / total * 100),
    )


@router.get("/{profile_id}", response_model=ProfileResponse)
async def get_profile(
    profile_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(get_current_user),
):
    """Get a full profile by public id or phone."""
    profile = await _load_profile(db, profile_id)
    ensure_can_access(current_user, profile.phone)
    return profile_service.to_response(profile)


async def _load_profile(db: AsyncSession, key: str) -> Profile:
    """Find a profile by public id, falling back to phone."""
    phone = normalize_phone(key)
    clause = Profile.id == key
    if phone:
        clause = or_(clause, Profile.phone == phone)

    result = await db.execute(select(Profile).where(clause).limit(1))
    profile = result.scalar_one_or_none()

    if not profile:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Profile not found",
        )
    return profile
