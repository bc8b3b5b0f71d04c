"""Workout library and trainer assignment schemas."""
from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from healfit.utils.phone import require_phone


class WorkoutBase(BaseModel):
    """Base schema for a library workout."""
    name: str = Field(..., min_length=1, max_length=200)
    type: Optional[str] = Field(None, max_length=50)
    sets: Optional[int] = Field(None, ge=1)
    reps: Optional[int] = Field(None, ge=1)
    muscle_group: Optional[str] = Field(None, max_length=200)
    goal: Optional[str] = Field(None, max_length=200)
    level: Optional[str] = Field(None, max_length=50)
    equipment: Optional[str] = Field(None, max_length=100)
    instructions: Optional[str] = None
    img: Optional[str] = None


class WorkoutCreate(WorkoutBase):
    """Schema for creating a workout."""
    pass


class WorkoutUpdate(BaseModel):
    """Schema for updating a workout."""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    type: Optional[str] = Field(None, max_length=50)
    sets: Optional[int] = Field(None, ge=1)
    reps: Optional[int] = Field(None, ge=1)
    muscle_group: Optional[str] = Field(None, max_length=200)
    goal: Optional[str] = Field(None, max_length=200)
    level: Optional[str] = Field(None, max_length=50)
    equipment: Optional[str] = Field(None, max_length=100)
    instructions: Optional[str] = None
    img: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_null(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("name cannot be null")
        return v


class WorkoutResponse(WorkoutBase):
    """Schema for workout response."""
    id: int

    model_config = ConfigDict(from_attributes=True)


class WorkoutListResponse(BaseModel):
    """List of workouts."""
    workouts: List[WorkoutResponse]


class WorkoutSaveResponse(BaseModel):
    """Result of a workout create."""
    success: bool = True
    id: int


class AssignWorkoutBulk(BaseModel):
    """Assign one or more workouts to one or more members."""
    user_ids: List[str] = Field(..., min_length=1)
    workout_id: Union[int, List[int]]
    assigned_by: Optional[str] = None

    @field_validator("user_ids")
    @classmethod
    def normalize_user_ids(cls, v: List[str]) -> List[str]:
        # Keep order, drop duplicates
        return list(dict.fromkeys(require_phone(p) for p in v))

    @field_validator("assigned_by")
    @classmethod
    def normalize_assigned_by(cls, v: Optional[str]) -> Optional[str]:
        return require_phone(v) if v else None

    @property
    def workout_ids(self) -> List[int]:
        ids = self.workout_id if isinstance(self.workout_id, list) else [self.workout_id]
        return list(dict.fromkeys(ids))


class AssignWorkoutResponse(BaseModel):
    """Result of a bulk assignment."""
    success: bool = True
    assigned: int


class UserWorkoutResponse(WorkoutResponse):
    """Workout assigned to a member."""
    assigned_by: Optional[str] = None
    assigned_at: datetime


class UserWorkoutListResponse(BaseModel):
    """Workouts assigned to a member."""
    workouts: List[UserWorkoutResponse]
