"""
Credential helpers for invitations and accounts.
"""

import hashlib
import re
import secrets
from typing import Optional

import bcrypt

MIN_PASSWORD_LENGTH = 8


def generate_invitation_token() -> str:
    """Cryptographically secure, URL-safe token (43 characters)"""
    return secrets.token_urlsafe(32)


def hash_token(token: str) -> str:
    """SHA-256 hex digest; only the digest is persisted"""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=12)).decode(
        "utf-8"
    )


def password_policy_violation(password: Optional[str]) -> Optional[str]:
    """Return a message describing why a password is rejected, if it is"""
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        return f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
    if not re.search(r"[A-Za-z]", password) or not re.search(r"\d", password):
        return "Password must contain at least one letter and one digit"
    return None
