"""Diet/workout plan schemas."""
import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from healfit.utils.phone import require_phone


class PlanItem(BaseModel):
    """Common shape of an item inside a plan day. Unknown keys are kept."""
    name: str = Field(..., max_length=200)
    completed: bool = False

    model_config = ConfigDict(extra="allow")


class MealItem(PlanItem):
    """Meal slot in a plan day."""
    time: Optional[str] = Field(None, max_length=20)
    calories: Optional[float] = Field(None, ge=0)
    items: List[str] = Field(default_factory=list)


class PlanWorkoutItem(PlanItem):
    """Workout prescribed for a plan day."""
    sets: Optional[int] = Field(None, ge=1)
    reps: Optional[int] = Field(None, ge=1)
    workout_id: Optional[int] = None


class PhysioItem(PlanItem):
    """Physiotherapy routine prescribed for a plan day."""
    sets: Optional[int] = Field(None, ge=1)
    reps: Optional[int] = Field(None, ge=1)
    duration_min: Optional[int] = Field(None, ge=1)
    notes: Optional[str] = None


class PlanDay(BaseModel):
    """One day of a member's plan."""
    day: int = Field(..., ge=1)
    date: Optional[dt.date] = None
    meals: List[MealItem] = Field(default_factory=list)
    workouts: List[PlanWorkoutItem] = Field(default_factory=list)
    physio: List[PhysioItem] = Field(default_factory=list)

    model_config = ConfigDict(extra="allow")


class PlanUpsert(BaseModel):
    """Create or replace the plan for a cycle, optionally with a note."""
    phone: str
    plan: List[PlanDay]
    expert: Optional[str] = Field(None, max_length=50)
    section: Optional[str] = Field(None, max_length=50)
    note: Optional[str] = None
    date: Optional[dt.date] = None  # Any day inside the target cycle

    @field_validator("phone")
    @classmethod
    def normalize_phone(cls, v: str) -> str:
        return require_phone(v)


class CycleResponse(BaseModel):
    """Plan cycle window."""
    index: int
    start: dt.date
    end: dt.date

    model_config = ConfigDict(from_attributes=True)


class PlanNoteResponse(BaseModel):
    """Expert note on a plan."""
    id: int
    author_phone: Optional[str] = None
    expert: Optional[str] = None
    section: Optional[str] = None
    note: str
    created_at: dt.datetime

    model_config = ConfigDict(from_attributes=True)


class PlanResponse(BaseModel):
    """Plan for one cycle. ``plan`` is None when nothing was saved yet."""
    plan: Optional[List[PlanDay]] = None
    last_modified_at: Optional[dt.datetime] = None
    last_modified_by: Optional[str] = None
    cycle: CycleResponse
    notes: List[PlanNoteResponse] = Field(default_factory=list)


class PlanSaveResponse(BaseModel):
    """Result of a plan upsert."""
    success: bool = True
    last_modified_at: dt.datetime
    cycle: CycleResponse
