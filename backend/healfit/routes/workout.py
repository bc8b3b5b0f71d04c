"""Workout library routes."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import String, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from healfit.models.base import get_db
from healfit.models.profile import Profile
from healfit.models.workout import UserWorkout, Workout
from healfit.schemas.auth import SuccessResponse
from healfit.schemas.workout import (
    WorkoutCreate,
    WorkoutListResponse,
    WorkoutResponse,
    WorkoutSaveResponse,
    WorkoutUpdate,
)
from healfit.utils.auth import get_current_user, require_trainer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/workouts", tags=["Workouts"])


def _tag_clause(column, tag: str):
    """Match one entry of a comma separated column, case-insensitively."""
    padded = "," + func.replace(func.lower(column), " ", "", type_=String) + ","
    return padded.like(f"%,{tag.strip().lower().replace(' ', '')},%")


@router.get("", response_model=WorkoutListResponse)
async def list_workouts(
    muscle: Optional[str] = Query(None),
    goal: Optional[str] = Query(None),
    level: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(get_current_user),
):
    """List library workouts, optionally filtered by muscle, goal and level."""
    query = select(Workout)

    if muscle:
        query = query.where(_tag_clause(Workout.muscle_group, muscle))
    if goal:
        query = query.where(_tag_clause(Workout.goal, goal))
    if level:
        query = query.where(func.lower(Workout.level) == level.strip().lower())

    result = await db.execute(query.order_by(Workout.name, Workout.id))
    return WorkoutListResponse(
        workouts=[WorkoutResponse.model_validate(w) for w in result.scalars().all()]
    )


@router.post("", response_model=WorkoutSaveResponse, status_code=status.HTTP_201_CREATED)
async def create_workout(
    workout_data: WorkoutCreate,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(require_trainer),
):
    """Add a workout to the library."""
    workout = Workout(**workout_data.model_dump())
    db.add(workout)
    await db.flush()

    logger.info(f"Workout {workout.id} created by {current_user.phone}")
    return WorkoutSaveResponse(id=workout.id)


@router.put("/{workout_id}", response_model=SuccessResponse)
async def update_workout(
    workout_id: int,
    workout_data: WorkoutUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(require_trainer),
):
    """Update a library workout."""
    workout = await _get_workout(db, workout_id)

    update_data = workout_data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(workout, field, value)

    await db.flush()
    return SuccessResponse()


@router.delete("/{workout_id}", response_model=SuccessResponse)
async def delete_workout(
    workout_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(require_trainer),
):
    """Delete a library workout and its assignments."""
    workout = await _get_workout(db, workout_id)

    await db.execute(delete(UserWorkout).where(UserWorkout.workout_id == workout_id))
    await db.delete(workout)
    await db.flush()

    logger.info(f"Workout {workout_id} deleted by {current_user.phone}")
    return SuccessResponse()


async def _get_workout(db: AsyncSession, workout_id: int) -> Workout:
    result = await db.execute(select(Workout).where(Workout.id == workout_id))
    workout = result.scalar_one_or_none()

    if not workout:
        raise HTTPException(status_code=404, detail="Workout not found")

    return workout
