"""Pydantic schemas for API validation."""
from healfit.schemas.profile import (
    ProfileUpsert,
    ProfileResponse,
    ProfilePublic,
    ProfileSaveResponse,
    ProfileCompleteness,
    UsernameCheck,
)
from healfit.schemas.auth import (
    LoginRequest,
    LoginResponse,
    TokenResponse,
    RefreshTokenRequest,
    OtpSendRequest,
    OtpSendResponse,
    OtpVerifyRequest,
    PasswordUpdateRequest,
    SuccessResponse,
)
from healfit.schemas.plan import (
    PlanDay,
    PlanUpsert,
    PlanResponse,
    PlanSaveResponse,
    CycleResponse,
)
from healfit.schemas.workout import (
    WorkoutCreate,
    WorkoutUpdate,
    WorkoutResponse,
    AssignWorkoutBulk,
    UserWorkoutResponse,
)
from healfit.schemas.admin import (
    CreateUser,
    CreateExpert,
    UpdateUser,
    DeleteUser,
    AssignTrainer,
)
from healfit.schemas.tracking import (
    EntryCreate,
    EntryStatus,
    TimeLogResponse,
    AttendanceResponse,
    MeasurementCreate,
    MeasurementResponse,
)
from healfit.schemas.tools import (
    BmrRequest,
    BmrResponse,
    BodyFatRequest,
    BodyFatResponse,
    MacroRequest,
    MacroResponse,
)

__all__ = [
    # Profile
    "ProfileUpsert",
    "ProfileResponse",
    "ProfilePublic",
    "ProfileSaveResponse",
    "ProfileCompleteness",
    "UsernameCheck",
    # Auth
    "LoginRequest",
    "LoginResponse",
    "TokenResponse",
    "RefreshTokenRequest",
    "OtpSendRequest",
    "OtpSendResponse",
    "OtpVerifyRequest",
    "PasswordUpdateRequest",
    "SuccessResponse",
    # Plan
    "PlanDay",
    "PlanUpsert",
    "PlanResponse",
    "PlanSaveResponse",
    "CycleResponse",
    # Workout
    "WorkoutCreate",
    "WorkoutUpdate",
    "WorkoutResponse",
    "AssignWorkoutBulk",
    "UserWorkoutResponse",
    # Admin
    "CreateUser",
    "CreateExpert",
    "UpdateUser",
    "DeleteUser",
    "AssignTrainer",
    # Tracking
    "EntryCreate",
    "EntryStatus",
    "TimeLogResponse",
    "AttendanceResponse",
    "MeasurementCreate",
    "MeasurementResponse",
    # Tools
    "BmrRequest",
    "BmrResponse",
    "BodyFatRequest",
    "BodyFatResponse",
    "MacroRequest",
    "MacroResponse",
]
