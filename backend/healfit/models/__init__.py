"""Database models."""
from healfit.models.base import Base
from healfit.models.profile import Profile, Role, EXPERT_ROLES
from healfit.models.plan import DietPlan, PlanNote
from healfit.models.workout import Workout, UserWorkout
from healfit.models.tracking import TimeLog, BodyMeasurement, EntryType

__all__ = [
    "Base",
    "Profile",
    "Role",
    "EXPERT_ROLES",
    "DietPlan",
    "PlanNote",
    "Workout",
    "UserWorkout",
    "TimeLog",
    "BodyMeasurement",
    "EntryType",
]
