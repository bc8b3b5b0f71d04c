"""Authentication service for passwords and JWT tokens."""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from healfit.config import get_settings
from healfit.models.profile import Profile
from healfit.schemas.auth import TokenResponse, TokenPayload

logger = logging.getLogger(__name__)
settings = get_settings()

# Salted, slow password hashing
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


class AuthService:
    """Service for handling authentication."""

    def __init__(self):
        """Initialize auth service."""
        self.secret_key = settings.jwt_secret_key
        self.algorithm = settings.jwt_algorithm
        self.access_token_expire = timedelta(minutes=settings.jwt_access_token_expire_minutes)
        self.refresh_token_expire = timedelta(days=settings.jwt_refresh_token_expire_days)

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password with a per-password salt."""
        return pwd_context.hash(password)

    def verify_password(self, password: str, password_hash: Optional[str]) -> bool:
        """Check a plaintext password against a stored hash."""
        if not password_hash:
            return False
        try:
            return pwd_context.verify(password, password_hash)
        except ValueError:
            # Hash in an unknown format
            logger.warning("Stored password hash could not be parsed")
            return False

    def _create_token(
        self,
        phone: str,
        role: str,
        token_type: str,
        expires_delta: timedelta,
    ) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": phone,
            "role": role,
            "exp": now + expires_delta,
            "iat": now,
            "type": token_type,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def create_access_token(
        self,
        phone: str,
        role: str,
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        """
        Create a JWT access token.

        Args:
            phone: Profile phone number (token subject)
            role: Profile role at issue time
            expires_delta: Optional custom expiration time

        Returns:
            Encoded JWT token
        """
        return self._create_token(phone, role, "access", expires_delta or self.access_token_expire)

    def create_refresh_token(self, phone: str, role: str) -> str:
        """
        Create a JWT refresh token.

        Args:
            phone: Profile phone number (token subject)
            role: Profile role at issue time

        Returns:
            Encoded JWT token
        """
        return self._create_token(phone, role, "refresh", self.refresh_token_expire)

    def create_token_pair(self, phone: str, role: str) -> TokenResponse:
        """Create both access and refresh tokens."""
        return TokenResponse(
            access_token=self.create_access_token(phone, role),
            refresh_token=self.create_refresh_token(phone, role),
            expires_in=int(self.access_token_expire.total_seconds()),
        )

    def verify_token(self, token: str, expected_type: str = "access") -> Optional[TokenPayload]:
        """
        Verify and decode a JWT token.

        Args:
            token: The JWT token to verify
            expected_type: Expected token type ("access" or "refresh")

        Returns:
            Decoded token payload or None if invalid
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
            )

            if payload.get("type") != expected_type:
                logger.warning(f"Token type mismatch: expected {expected_type}")
                return None

            return TokenPayload(
                sub=payload["sub"],
                role=payload["role"],
                exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
                iat=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                type=payload["type"],
            )

        except jwt.ExpiredSignatureError:
            logger.warning("Token expired")
            return None
        except (jwt.InvalidTokenError, KeyError) as e:
            logger.warning(f"Invalid token: {e}")
            return None

    async def find_profile(
        self,
        db: AsyncSession,
        email: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> Optional[Profile]:
        """
        Look up a profile by email (preferred) or phone.

        Args:
            db: Database session
            email: Email address
            phone: Normalized phone number

        Returns:
            Profile or None
        """
        if email:
            query = select(Profile).where(Profile.email == email.lower())
        elif phone:
            query = select(Profile).where(Profile.phone == phone)
        else:
            return None

        result = await db.execute(query)
        return result.scalar_one_or_none()


# Singleton instance
auth_service = AuthService()
