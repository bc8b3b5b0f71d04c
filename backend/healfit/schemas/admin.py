"""Administration schemas."""
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from healfit.config import get_settings
from healfit.models.profile import Role
from healfit.schemas.profile import CamelModel, ProfileFields, ProfileResponse
from healfit.utils.phone import require_phone

settings = get_settings()


def _check_password(v: Optional[str]) -> Optional[str]:
    if v is not None and len(v) < settings.password_min_length:
        raise ValueError(f"Password must be at least {settings.password_min_length} characters")
    return v


class CreateUser(BaseModel):
    """Account created by an admin."""
    phone: str
    username: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str
    role: Role = Role.USER
    specialty: Optional[str] = Field(None, max_length=100)
    full_name: Optional[str] = Field(None, max_length=200)

    @field_validator("phone")
    @classmethod
    def normalize_phone(cls, v: str) -> str:
        return require_phone(v)

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        return _check_password(v)


class CreateExpert(CreateUser):
    """Expert account created by an admin."""
    role: Role = Role.TRAINER
    specialty: str = Field(..., min_length=1, max_length=100)

    @field_validator("role")
    @classmethod
    def expert_role(cls, v: Role) -> Role:
        if v not in (Role.TRAINER, Role.DIETITIAN, Role.PHYSIO):
            raise ValueError("Expert role must be trainer, dietitian or physio")
        return v


class UpdateUser(ProfileFields):
    """Partial update of any profile, optionally changing its phone."""
    old_phone: str
    phone: Optional[str] = None
    password: Optional[str] = None
    role: Optional[Role] = None
    specialty: Optional[str] = Field(None, max_length=100)
    trainer_phone: Optional[str] = None

    @field_validator("old_phone")
    @classmethod
    def normalize_old_phone(cls, v: str) -> str:
        return require_phone(v)

    @field_validator("phone", "trainer_phone")
    @classmethod
    def normalize_phones(cls, v: Optional[str]) -> Optional[str]:
        return require_phone(v) if v else None

    @field_validator("password")
    @classmethod
    def check_password(cls, v: Optional[str]) -> Optional[str]:
        return _check_password(v)

    @field_validator("role")
    @classmethod
    def role_not_null(cls, v: Optional[Role]) -> Role:
        if v is None:
            raise ValueError("role cannot be null")
        return v


class DeleteUser(BaseModel):
    """Profile to delete."""
    phone: str

    @field_validator("phone")
    @classmethod
    def normalize_phone(cls, v: str) -> str:
        return require_phone(v)


class AssignTrainer(CamelModel):
    """Set or clear a member's trainer."""
    user_phone: str
    trainer_phone: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _blank_trainer(cls, data):
        if isinstance(data, dict):
            for key in ("trainerPhone", "trainer_phone"):
                if isinstance(data.get(key), str) and not data[key].strip():
                    data = {**data, key: None}
        return data

    @field_validator("user_phone")
    @classmethod
    def normalize_user_phone(cls, v: str) -> str:
        return require_phone(v)

    @field_validator("trainer_phone")
    @classmethod
    def normalize_trainer_phone(cls, v: Optional[str]) -> Optional[str]:
        return require_phone(v) if v else None


class UserListResponse(BaseModel):
    """Profiles listed for administrators and trainers."""
    users: List[ProfileResponse]
