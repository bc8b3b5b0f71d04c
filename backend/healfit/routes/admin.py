"""Administration routes."""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from healfit.models.base import get_db
from healfit.models.profile import Profile, Role, generate_public_id
from healfit.schemas.admin import (
    AssignTrainer,
    CreateExpert,
    CreateUser,
    DeleteUser,
    UpdateUser,
    UserListResponse,
)
from healfit.schemas.auth import SuccessResponse
from healfit.services import profile_service
from healfit.utils.auth import require_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["Admin"])


async def _require_profile(db: AsyncSession, phone: str) -> Profile:
    profile = await profile_service.get_by_phone(db, phone)
    if not profile:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    return profile


async def _ensure_unique(db: AsyncSession, username, email, exclude_phone=None) -> None:
    conflict = await profile_service.find_conflict(db, username, email, exclude_phone)
    if conflict == "username":
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already taken")
    if conflict == "email":
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered")


async def _require_trainer_profile(db: AsyncSession, phone: str) -> Profile:
    trainer = await profile_service.get_by_phone(db, phone)
    if not trainer or trainer.role != Role.TRAINER:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Selected profile is not a trainer",
        )
    return trainer


async def _create_account(db: AsyncSession, data: CreateUser, admin: Profile) -> None:
    if await profile_service.get_by_phone(db, data.phone):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Phone number already registered",
        )
    await _ensure_unique(db, data.username, data.email)

    profile = Profile(phone=data.phone, id=generate_public_id())
    profile_service.apply_updates(profile, data.model_dump(exclude_none=True, exclude={"phone"}))
    db.add(profile)
    await db.flush()

    logger.info(f"Admin {admin.phone} created {profile.role.value} {profile.phone}")


@router.get("/users", response_model=UserListResponse)
async def list_users(
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(require_admin),
):
    """List all profiles."""
    result = await db.execute(select(Profile).order_by(Profile.role, Profile.username))
    return UserListResponse(
        users=[profile_service.to_response(p) for p in result.scalars().all()]
    )


@router.post("/create-user", response_model=SuccessResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    request: CreateUser,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(require_admin),
):
    """Create an account with any role."""
    await _create_account(db, request, current_user)
    return SuccessResponse()


@router.post("/create-expert", response_model=SuccessResponse, status_code=status.HTTP_201_CREATED)
async def create_expert(
    request: CreateExpert,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(require_admin),
):
    """Create a trainer, dietitian or physio account."""
    await _create_account(db, request, current_user)
    return SuccessResponse()


@router.post("/update-user", response_model=SuccessResponse)
async def update_user(
    request: UpdateUser,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(require_admin),
):
    """
    Update any profile.

    Changing the phone number re-keys the profile and everything that
    refers to it.
    """
    profile = await _require_profile(db, request.old_phone)
    updates = request.model_dump(exclude_unset=True, exclude={"old_phone", "phone"})

    await _ensure_unique(db, request.username, request.email, exclude_phone=profile.phone)

    if updates.get("trainer_phone"):
        await _require_trainer_profile(db, updates["trainer_phone"])

    if request.phone and request.phone != profile.phone:
        if await profile_service.get_by_phone(db, request.phone):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Phone number already registered",
            )
        await profile_service.change_phone(db, profile, request.phone)

    profile_service.apply_updates(profile, updates)
    await db.flush()

    logger.info(f"Admin {current_user.phone} updated profile {profile.phone}")
    return SuccessResponse()


@router.post("/delete-user", response_model=SuccessResponse)
async def delete_user(
    request: DeleteUser,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(require_admin),
):
    """Delete a profile and its data."""
    if request.phone == current_user.phone:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Admins cannot delete their own account",
        )

    profile = await _require_profile(db, request.phone)
    await profile_service.delete_profile(db, profile)

    logger.info(f"Admin {current_user.phone} deleted profile {request.phone}")
    return SuccessResponse()


@router.post("/assign-trainer", response_model=SuccessResponse)
async def assign_trainer(
    request: AssignTrainer,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(require_admin),
):
    """Set or clear a member's trainer."""
    profile = await _require_profile(db, request.user_phone)

    if request.trainer_phone:
        await _require_trainer_profile(db, request.trainer_phone)

    profile.trainer_phone = request.trainer_phone
    await db.flush()

    logger.info(
        f"Admin {current_user.phone} assigned trainer {request.trainer_phone} to {profile.phone}"
    )
    return SuccessResponse()
