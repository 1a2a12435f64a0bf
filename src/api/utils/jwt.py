from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from config import ApplicationConfig


def create_access_token(
    user_id: UUID,
    role: str,
    employee_id: Optional[UUID] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create JWT access token

    Args:
        user_id: User UUID
        role: User role (admin, hr, viewer, prospective_employee)
        employee_id: Linked employee, if the account has one
        expires_delta: Token lifetime (defaults to JWT_EXPIRY_MINUTES)

    Returns:
        JWT token string (HS256)
    """
    now = datetime.now(UTC)
    if expires_delta is None:
        expires_delta = timedelta(minutes=ApplicationConfig.JWT_EXPIRY_MINUTES)
    payload = {
        "user_id": str(user_id),
        "role": role,
        "exp": now + expires_delta,
        "iat": now,
    }
    if employee_id is not None:
        payload["employee_id"] = str(employee_id)
    return jwt.encode(payload, ApplicationConfig.JWT_SECRET, algorithm="HS256")


def verify_jwt(token: str) -> Optional[dict]:
    """
    Verify and decode JWT token

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict or None if invalid
    """
    try:
        payload = jwt.decode(
            token, ApplicationConfig.JWT_SECRET, algorithms=["HS256"]
        )
        return payload
    except JWTError:
        return None
