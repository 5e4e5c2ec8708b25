from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from config import ApplicationConfig


def create_access_token(
    account_id: UUID, role: str, expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create JWT access token

    Args:
        account_id: Account UUID, stored in the `sub` claim
        role: Global account role (admin, volunteer, member)
        expires_delta: Token lifetime, ACCESS_TOKEN_EXPIRE_MINUTES by default

    Returns:
        Signed JWT string
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=ApplicationConfig.ACCESS_TOKEN_EXPIRE_MINUTES)
    now = datetime.now(UTC)
    payload = {
        "sub": str(account_id),
        "role": role,
        "exp": now + expires_delta,
        "iat": now,
    }
    return jwt.encode(
        payload, ApplicationConfig.JWT_SECRET, algorithm=ApplicationConfig.JWT_ALGORITHM
    )


def verify_jwt(token: str) -> Optional[dict]:
    """
    Verify and decode JWT token

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict or None if invalid or expired
    """
    try:
        payload = jwt.decode(
            token,
            ApplicationConfig.JWT_SECRET,
            algorithms=[ApplicationConfig.JWT_ALGORITHM],
        )
        return payload
    except JWTError:
        return None
