import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt
from passlib.context import CryptContext

from portfolio_api.core.config import settings

ADMIN_ROLE = "admin"


class CredentialVerifier:
    """Checks a candidate password against the admin password.

    The bcrypt hash is computed once when the verifier is built (at startup),
    so requests only pay for the comparison.
    """

    def __init__(self, password: str, rounds: Optional[int] = None):
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds or settings.BCRYPT_ROUNDS,
        )
        self._hashed = self._context.hash(password)

    def verify(self, password: str) -> bool:
        """Verify plain password against the cached hash"""
        try:
            return self._context.verify(password, self._hashed)
        except Exception:
            return False


@dataclass(frozen=True)
class IssuedToken:
    token: str
    expires_at: datetime


def issue_token(subject: Optional[str] = None, expires_delta: Optional[timedelta] = None) -> IssuedToken:
    """Create a signed admin session token"""
    issued_at = datetime.now(timezone.utc)
    expires_at = issued_at + (expires_delta or timedelta(hours=settings.ACCESS_TOKEN_EXPIRE_HOURS))

    to_encode = {
        "sub": subject or settings.ADMIN_USERNAME,
        "role": ADMIN_ROLE,
        "iat": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
        "jti": secrets.token_hex(16),
    }
    encoded_jwt = jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
    return IssuedToken(token=encoded_jwt, expires_at=expires_at)


def decode_token(token: str) -> dict:
    """Decode and validate JWT token. Raises jose.JWTError on failure."""
    return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])


def token_expiry(payload: dict) -> Optional[datetime]:
    exp = payload.get("exp")
    if exp is None:
        return None
    return datetime.fromtimestamp(int(exp), tz=timezone.utc)
