"""Trainer and expert routes: workout assignment and member views."""
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from healfit.models.base import get_db, utcnow
from healfit.models.profile import Profile
from healfit.models.workout import UserWorkout, Workout
from healfit.schemas.admin import UserListResponse
from healfit.schemas.profile import ProfileResponse
from healfit.schemas.workout import (
    AssignWorkoutBulk,
    AssignWorkoutResponse,
    UserWorkoutListResponse,
    UserWorkoutResponse,
    WorkoutResponse,
)
from healfit.services import profile_service
from healfit.utils.auth import ensure_can_access, get_current_user, require_expert, require_trainer
from healfit.utils.phone import phone_param

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Trainer"])


@router.post("/trainer/assign-workout-bulk", response_model=AssignWorkoutResponse)
async def assign_workouts_bulk(
    request: AssignWorkoutBulk,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(require_trainer),
):
    """
    Assign workouts to members.

    Existing assignments are refreshed with the new assigner and time.
    """
    workout_ids = request.workout_ids

    result = await db.execute(select(Workout.id).where(Workout.id.in_(workout_ids)))
    found_workouts = set(result.scalars().all())
    missing_workouts = [w for w in workout_ids if w not in found_workouts]
    if missing_workouts:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Workout not found: {', '.join(str(w) for w in missing_workouts)}",
        )

    result = await db.execute(select(Profile.phone).where(Profile.phone.in_(request.user_ids)))
    found_users = set(result.scalars().all())
    missing_users = [u for u in request.user_ids if u not in found_users]
    if missing_users:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User not found: {', '.join(missing_users)}",
        )

    result = await db.execute(
        select(UserWorkout).where(
            and_(
                UserWorkout.user_phone.in_(request.user_ids),
                UserWorkout.workout_id.in_(workout_ids),
            )
        )
    )
    existing = {(uw.user_phone, uw.workout_id): uw for uw in result.scalars().all()}

    assigned_by = request.assigned_by or current_user.phone
    now = utcnow()
    count = 0

    for phone in request.user_ids:
        for workout_id in workout_ids:
            assignment = existing.get((phone, workout_id))
            if assignment:
                assignment.assigned_by = assigned_by
                assignment.assigned_at = now
            else:
                db.add(
                    UserWorkout(
                        user_phone=phone,
                        workout_id=workout_id,
                        assigned_by=assigned_by,
                        assigned_at=now,
                    )
                )
            count += 1

    await db.flush()

    logger.info(f"{count} workout assignments made by {current_user.phone}")
    return AssignWorkoutResponse(assigned=count)


@router.get("/trainer/user-workouts", response_model=UserWorkoutListResponse)
async def get_user_workouts(
    user_id: str = Query(...),
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(get_current_user),
):
    """List workouts assigned to a member, newest first."""
    phone = phone_param(user_id)
    ensure_can_access(current_user, phone)

    result = await db.execute(
        select(UserWorkout, Workout)
        .join(Workout, UserWorkout.workout_id == Workout.id)
        .where(UserWorkout.user_phone == phone)
        .order_by(UserWorkout.assigned_at.desc(), UserWorkout.id.desc())
    )

    workouts = [
        UserWorkoutResponse(
            **WorkoutResponse.model_validate(workout).model_dump(),
            assigned_by=assignment.assigned_by,
            assigned_at=assignment.assigned_at,
        )
        for assignment, workout in result.all()
    ]
    return UserWorkoutListResponse(workouts=workouts)


@router.get("/trainer/assigned-users", response_model=UserListResponse)
async def get_assigned_users(
    trainer_phone: str = Query(..., alias="trainerPhone"),
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(require_trainer),
):
    """List members assigned to a trainer."""
    phone = phone_param(trainer_phone)

    if not current_user.is_admin and current_user.phone != phone:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Trainers can only list their own members",
        )

    result = await db.execute(
        select(Profile).where(Profile.trainer_phone == phone).order_by(Profile.username)
    )
    return UserListResponse(
        users=[profile_service.to_response(p) for p in result.scalars().all()]
    )


@router.get("/experts/user/{phone}", response_model=ProfileResponse)
async def get_user_for_expert(
    phone: str,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(require_expert),
):
    """Full member profile for the expert detail view."""
    profile = await profile_service.get_by_phone(db, phone_param(phone))

    if not profile:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )

    return profile_service.to_response(profile)
