"""Authentication utilities."""
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from healfit.models.base import get_db
from healfit.models.profile import EXPERT_ROLES, Profile, Role
from healfit.services.auth_service import auth_service

# Bearer token security scheme
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> Profile:
    """
    Dependency to get the current authenticated profile.

    Validates the JWT token from the Authorization header and loads the
    profile named by its subject.

    Raises:
        HTTPException: If token is missing, invalid, or the profile is gone.
    """
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = credentials.credentials
    payload = auth_service.verify_token(token, expected_type="access")

    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    result = await db.execute(
        select(Profile).where(Profile.phone == payload.sub)
    )
    user = result.scalar_one_or_none()

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )

    return user


async def get_current_user_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> Optional[Profile]:
    """
    Dependency to optionally get the current profile.

    Returns None if no valid authentication is provided, instead of raising an error.
    """
    if not credentials:
        return None

    try:
        return await get_current_user(credentials, db)
    except HTTPException:
        return None


def require_roles(*roles: Role):
    """
    Build a dependency that only lets the given roles through.

    Usage:
        current_user: Profile = Depends(require_roles(Role.TRAINER, Role.ADMIN))
    """
    allowed = frozenset(roles)

    async def dependency(current_user: Profile = Depends(get_current_user)) -> Profile:
        if current_user.role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return current_user

    return dependency


require_admin = require_roles(Role.ADMIN)
require_expert = require_roles(*EXPERT_ROLES, Role.ADMIN)
require_trainer = require_roles(Role.TRAINER, Role.ADMIN)


def ensure_can_access(current_user: Profile, phone: str) -> None:
    """
    Allow a profile to act on its own data; experts and admins on anyone's.

    Raises:
        HTTPException: 403 for other members' data
    """
    if current_user.phone == phone or current_user.is_admin or current_user.is_expert:
        return
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="Not allowed to access this user",
    )
