"""Login, token refresh, OTP and password reset routes."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from healfit.config import get_settings
from healfit.models.base import get_db
from healfit.schemas.auth import (
    LoginRequest,
    LoginResponse,
    OtpSendRequest,
    OtpSendResponse,
    OtpVerifyRequest,
    PasswordUpdateRequest,
    RefreshTokenRequest,
    SuccessResponse,
    TokenResponse,
)
from healfit.services import profile_service
from healfit.services.auth_service import auth_service
from healfit.services.otp_service import OtpStatus, otp_service
from healfit.utils.phone import normalize_phone

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(prefix="/api", tags=["Authentication"])


def _otp_identifier(email: Optional[str], phone: Optional[str]) -> str:
    """Key an OTP by lower-cased email, or by normalized phone."""
    if email and email.strip():
        return email.strip().lower()
    if phone and phone.strip():
        normalized = normalize_phone(phone)
        if not normalized:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid phone number",
            )
        return normalized
    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="Email or phone required",
    )


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Log in with email or phone and password.

    Returns the profile together with an access/refresh token pair.
    """
    email = (request.email or "").strip().lower() or None
    phone = normalize_phone(request.phone) if request.phone else None

    if not (email or phone) or not request.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing fields",
        )

    user = await auth_service.find_profile(db, email=email, phone=phone)

    if not user:
        logger.warning(f"Login attempt for unknown account {email or phone}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found. Please sign up first.",
        )

    if not auth_service.verify_password(request.password, user.password_hash):
        logger.warning(f"Failed login for {user.phone}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    tokens = auth_service.create_token_pair(user.phone, user.role.value)
    logger.info(f"User {user.phone} logged in")

    return LoginResponse(
        **tokens.model_dump(),
        user=profile_service.to_response(user),
    )


@router.post("/token/refresh", response_model=TokenResponse)
async def refresh_token(
    request: RefreshTokenRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Refresh an access token using a refresh token.

    The role is re-read from the profile so role changes take effect.
    """
    payload = auth_service.verify_token(request.refresh_token, expected_type="refresh")

    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired refresh token",
        )

    user = await profile_service.get_by_phone(db, payload.sub)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )

    return auth_service.create_token_pair(user.phone, user.role.value)


@router.post("/send-otp", response_model=OtpSendResponse)
async def send_otp(request: OtpSendRequest):
    """
    Issue a one-time passcode for an email or phone.

    No SMS or e-mail gateway is wired in; with debug echo enabled the code
    is returned in the response.
    """
    identifier = _otp_identifier(request.email, request.phone)
    code, result = otp_service.issue(identifier)

    if result == OtpStatus.COOLDOWN:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Please wait before requesting another OTP",
        )
    if result == OtpStatus.RATE_LIMITED:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many OTP requests. Try again later.",
        )

    logger.info(f"OTP issued for {identifier}")

    return OtpSendResponse(
        expires_in=otp_service.ttl_seconds,
        otp=code if settings.otp_debug_echo else None,
    )


@router.post("/verify-otp", response_model=SuccessResponse)
async def verify_otp(request: OtpVerifyRequest):
    """Verify a one-time passcode."""
    if not request.otp or not ((request.email or "").strip() or (request.phone or "").strip()):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing fields",
        )

    identifier = _otp_identifier(request.email, request.phone)
    _raise_for_otp_status(otp_service.verify(identifier, request.otp))

    return SuccessResponse()


def _raise_for_otp_status(result: OtpStatus) -> None:
    if result == OtpStatus.OK:
        return
    if result == OtpStatus.EXPIRED:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="OTP expired")
    if result == OtpStatus.LOCKED:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many attempts. Request a new OTP.",
        )
    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid OTP")


@router.post("/update-password", response_model=SuccessResponse)
async def update_password(
    request: PasswordUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Reset a password after OTP verification.

    Either pass the OTP here, or verify it first through ``/verify-otp``.
    """
    if len(request.password) < settings.password_min_length:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Password must be at least {settings.password_min_length} characters",
        )

    user = await profile_service.get_by_phone(db, request.phone)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )

    if request.otp:
        _raise_for_otp_status(otp_service.verify(user.phone, request.otp))
        otp_service.consume_verification(user.phone)
    else:
        verified = otp_service.consume_verification(user.phone)
        if not verified and user.email:
            verified = otp_service.consume_verification(user.email)
        if not verified:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="OTP verification required",
            )

    user.password_hash = auth_service.hash_password(request.password)
    await db.flush()

    logger.info(f"Password updated for {user.phone}")
    return SuccessResponse()
