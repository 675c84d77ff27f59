from datetime import datetime, timedelta, timezone

from jose import jwt

from auvora.core.config import settings


# ─── JWT ──────────────────────────────────────────────────────────────────────
# Tokens are minted by the identity provider; create_access_token exists for
# scripts and tests that need a locally signed token with the same claims.

def create_access_token(subject: str, role: str, expires_minutes: int = 60) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    return jwt.encode(
        {"sub": subject, "role": role, "exp": expire, "type": "access"},
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_token(token: str) -> dict:
    """Raises JWTError on invalid/expired token."""
    return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
