"""Authentication schemas."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from healfit.schemas.profile import ProfileResponse
from healfit.utils.phone import require_phone


class LoginRequest(BaseModel):
    """Login with email or phone plus password."""
    email: Optional[str] = None
    phone: Optional[str] = None
    password: Optional[str] = None


class TokenResponse(BaseModel):
    """Authentication token response."""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds


class LoginResponse(TokenResponse):
    """Successful login."""
    success: bool = True
    user: ProfileResponse


class RefreshTokenRequest(BaseModel):
    """Request to refresh access token."""
    refresh_token: str


class TokenPayload(BaseModel):
    """JWT token payload."""
    sub: str  # phone
    role: str
    exp: datetime
    iat: datetime
    type: str  # "access" or "refresh"


class OtpSendRequest(BaseModel):
    """Request a one-time passcode."""
    email: Optional[str] = None
    phone: Optional[str] = None


class OtpSendResponse(BaseModel):
    """OTP issued."""
    success: bool = True
    expires_in: int
    otp: Optional[str] = None  # Only when debug echo is enabled


class OtpVerifyRequest(BaseModel):
    """Verify a one-time passcode."""
    email: Optional[str] = None
    phone: Optional[str] = None
    otp: Optional[str] = None


class PasswordUpdateRequest(BaseModel):
    """Reset a password after OTP verification."""
    phone: str
    password: str
    otp: Optional[str] = Field(None, min_length=4, max_length=10)

    @field_validator("phone")
    @classmethod
    def normalize_phone(cls, v: str) -> str:
        return require_phone(v)


class SuccessResponse(BaseModel):
    """Generic success flag."""
    success: bool = True
