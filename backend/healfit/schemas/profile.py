"""Profile and onboarding schemas."""
from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from healfit.models.profile import ActivityLevel, DietaryPreference, FitnessGoal, Gender, Role
from healfit.utils.phone import require_phone


class CamelModel(BaseModel):
    """Schema exchanged with the web client using camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def blank_to_none(data: Any) -> Any:
    """Treat empty form strings as missing values."""
    if isinstance(data, dict):
        return {k: (None if isinstance(v, str) and not v.strip() else v) for k, v in data.items()}
    return data


class ProfileFields(CamelModel):
    """Editable profile fields shared by upsert and admin update."""
    username: Optional[str] = Field(None, max_length=100)
    email: Optional[EmailStr] = None
    full_name: Optional[str] = Field(None, max_length=200)
    photo: Optional[str] = None  # data URL or avatar URL
    gender: Optional[Gender] = None
    dob: Optional[date] = None
    height: Optional[float] = Field(None, gt=0, le=300)
    weight: Optional[float] = Field(None, gt=0, le=500)
    activity_level: Optional[ActivityLevel] = None
    fitness_goal: Optional[FitnessGoal] = None
    dietary_preference: Optional[DietaryPreference] = None
    sleep_hours: Optional[str] = Field(None, max_length=20)
    stress_level: Optional[int] = Field(None, ge=1, le=10)
    medical_conditions: Optional[str] = None
    address: Optional[str] = Field(None, max_length=255)
    city: Optional[str] = Field(None, max_length=100)
    country: Optional[str] = Field(None, max_length=100)

    @model_validator(mode="before")
    @classmethod
    def _blank_to_none(cls, data: Any) -> Any:
        return blank_to_none(data)

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: Optional[str]) -> Optional[str]:
        return v.lower() if v else v


class ProfileUpsert(ProfileFields):
    """Signup, onboarding and self-service profile update."""
    phone: str
    id: Optional[str] = Field(None, max_length=64)
    password: Optional[str] = None

    @field_validator("phone")
    @classmethod
    def normalize_phone(cls, v: str) -> str:
        return require_phone(v)


class ProfileResponse(CamelModel):
    """Profile as returned to clients. Never includes the password hash."""
    id: str
    phone: str
    username: Optional[str] = None
    email: Optional[str] = None
    full_name: str = ""
    photo: str = ""
    role: Role
    specialty: Optional[str] = None
    trainer_phone: Optional[str] = None
    gender: Optional[Gender] = None
    dob: Optional[date] = None
    age: Optional[int] = None
    height: Optional[float] = None
    weight: Optional[float] = None
    activity_level: Optional[ActivityLevel] = None
    fitness_goal: Optional[FitnessGoal] = None
    dietary_preference: Optional[DietaryPreference] = None
    sleep_hours: Optional[str] = None
    stress_level: Optional[int] = None
    medical_conditions: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProfilePublic(BaseModel):
    """Minimal profile used for "already registered" checks."""
    id: str
    phone: str
    username: Optional[str] = None
    role: Role

    model_config = ConfigDict(from_attributes=True)


class ProfileSaveResponse(BaseModel):
    """Result of a profile upsert."""
    success: bool = True
    id: str


class UsernameCheck(BaseModel):
    """Username availability."""
    exists: bool


class ProfileCompleteness(BaseModel):
    """Onboarding completeness status."""
    is_complete: bool
    missing_fields: list[str]
    completion_percent: int
