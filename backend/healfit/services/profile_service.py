"""Profile persistence helpers shared by the profile, auth and admin routes."""
import logging
from typing import Any, Optional

from sqlalchemy import delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from healfit.models.plan import DietPlan, PlanNote
from healfit.models.profile import Profile
from healfit.models.tracking import BodyMeasurement, TimeLog
from healfit.models.workout import UserWorkout
from healfit.schemas.profile import ProfilePublic, ProfileResponse
from healfit.services.auth_service import auth_service
from healfit.services.field_encryption import get_field_encryption

logger = logging.getLogger(__name__)

# Fields stored encrypted
ENCRYPTED_FIELDS = ("full_name", "photo")

# Fields checked for onboarding completeness
ONBOARDING_FIELDS = (
    "full_name",
    "gender",
    "dob",
    "height",
    "weight",
    "activity_level",
    "fitness_goal",
)


def to_response(profile: Profile) -> ProfileResponse:
    """Build the client view of a profile, decrypting protected fields."""
    cipher = get_field_encryption()
    return ProfileResponse(
        id=profile.id,
        phone=profile.phone,
        username=profile.username,
        email=profile.email,
        full_name=cipher.decrypt(profile.full_name),
        photo=cipher.decrypt(profile.photo),
        role=profile.role,
        specialty=profile.specialty,
        trainer_phone=profile.trainer_phone,
        gender=profile.gender,
        dob=profile.dob,
        age=profile.age,
        height=profile.height,
        weight=profile.weight,
        activity_level=profile.activity_level,
        fitness_goal=profile.fitness_goal,
        dietary_preference=profile.dietary_preference,
        sleep_hours=profile.sleep_hours,
        stress_level=profile.stress_level,
        medical_conditions=profile.medical_conditions,
        address=profile.address,
        city=profile.city,
        country=profile.country,
        created_at=profile.created_at,
        updated_at=profile.updated_at,
    )


def to_public(profile: Profile) -> ProfilePublic:
    return ProfilePublic.model_validate(profile)


def apply_updates(profile: Profile, updates: dict[str, Any]) -> None:
    """
    Copy validated field values onto a profile.

    Passwords are hashed and protected fields encrypted; a None password
    leaves the stored hash unchanged.
    """
    cipher = get_field_encryption()

    for field, value in updates.items():
        if field == "password":
            if value:
                profile.password_hash = auth_service.hash_password(value)
            continue
        if field in ENCRYPTED_FIELDS:
            value = cipher.encrypt(value)
        setattr(profile, field, value)


def missing_onboarding_fields(profile: Profile) -> list[str]:
    """Onboarding fields the profile has not filled in yet."""
    cipher = get_field_encryption()
    missing = []
    for field in ONBOARDING_FIELDS:
        value = getattr(profile, field)
        if field in ENCRYPTED_FIELDS:
            value = cipher.decrypt(value)
        if value is None or value == "":
            missing.append(field)
    return missing


async def get_by_phone(db: AsyncSession, phone: str) -> Optional[Profile]:
    result = await db.execute(select(Profile).where(Profile.phone == phone))
    return result.scalar_one_or_none()


async def find_conflict(
    db: AsyncSession,
    username: Optional[str] = None,
    email: Optional[str] = None,
    exclude_phone: Optional[str] = None,
) -> Optional[str]:
    """
    Check username/email uniqueness.

    Returns:
        Name of the conflicting field, or None
    """
    clauses = []
    if username:
        clauses.append(Profile.username == username)
    if email:
        clauses.append(Profile.email == email.lower())
    if not clauses:
        return None

    query = select(Profile).where(or_(*clauses))
    if exclude_phone:
        query = query.where(Profile.phone != exclude_phone)

    result = await db.execute(query.limit(1))
    other = result.scalar_one_or_none()
    if not other:
        return None
    return "username" if username and other.username == username else "email"


async def change_phone(db: AsyncSession, profile: Profile, new_phone: str) -> None:
    """
    Re-key a profile and every row that references its phone number.

    Args:
        db: Database session
        profile: Profile being re-keyed
        new_phone: Normalized new phone number
    """
    old_phone = profile.phone

    await db.execute(update(DietPlan).where(DietPlan.phone == old_phone).values(phone=new_phone))
    await db.execute(
        update(DietPlan).where(DietPlan.last_modified_by == old_phone).values(last_modified_by=new_phone)
    )
    await db.execute(
        update(PlanNote).where(PlanNote.author_phone == old_phone).values(author_phone=new_phone)
    )
    await db.execute(
        update(UserWorkout).where(UserWorkout.user_phone == old_phone).values(user_phone=new_phone)
    )
    await db.execute(
        update(UserWorkout).where(UserWorkout.assigned_by == old_phone).values(assigned_by=new_phone)
    )
    await db.execute(update(TimeLog).where(TimeLog.user_phone == old_phone).values(user_phone=new_phone))
    await db.execute(
        update(BodyMeasurement).where(BodyMeasurement.user_phone == old_phone).values(user_phone=new_phone)
    )
    await db.execute(
        update(BodyMeasurement).where(BodyMeasurement.measured_by == old_phone).values(measured_by=new_phone)
    )
    await db.execute(
        update(Profile).where(Profile.trainer_phone == old_phone).values(trainer_phone=new_phone)
    )

    profile.phone = new_phone
    await db.flush()

    logger.info(f"Profile re-keyed from {old_phone} to {new_phone}")


async def delete_profile(db: AsyncSession, profile: Profile) -> None:
    """Delete a profile with its plans, assignments, time logs and measurements."""
    phone = profile.phone

    plan_ids = select(DietPlan.id).where(DietPlan.phone == phone)
    await db.execute(delete(PlanNote).where(PlanNote.plan_id.in_(plan_ids)))
    await db.execute(delete(DietPlan).where(DietPlan.phone == phone))
    await db.execute(delete(UserWorkout).where(UserWorkout.user_phone == phone))
    await db.execute(delete(TimeLog).where(TimeLog.user_phone == phone))
    await db.execute(delete(BodyMeasurement).where(BodyMeasurement.user_phone == phone))
    await db.execute(update(Profile).where(Profile.trainer_phone == phone).values(trainer_phone=None))

    await db.delete(profile)
    await db.flush()

    logger.info(f"Profile {phone} deleted")
