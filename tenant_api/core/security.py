"""JWT helpers used to resolve the acting identity of a request."""
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import jwt, JWTError
from pydantic import BaseModel
import uuid

from tenant_api.core.config import settings
from tenant_api.core.logging import get_logger


logger = get_logger(__name__)


class TokenPayload(BaseModel):
    """Subset of JWT claims the service cares about."""
    sub: str
    exp: Optional[datetime] = None
    iat: Optional[datetime] = None
    aud: Optional[str] = None
    iss: Optional[str] = None

    class Config:
        extra = "allow"


def create_access_token(subject: str, expires_minutes: int = 30) -> str:
    """Create a signed token for `subject`. Mostly useful for tooling and tests."""
    if not settings.JWT_SECRET_KEY:
        raise RuntimeError("JWT_SECRET_KEY is not configured")

    now = datetime.now(timezone.utc)
    payload = {
        "sub": subject,
        "exp": now + timedelta(minutes=expires_minutes),
        "iat": now,
        "jti": str(uuid.uuid4()),
    }

    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> Optional[TokenPayload]:
    """Decode and validate a bearer token, returning None when it is unusable."""
    if not settings.JWT_SECRET_KEY:
        logger.warning("Bearer token supplied but JWT_SECRET_KEY is not configured")
        return None

    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            options={"verify_aud": False},
        )
        return TokenPayload(**payload)
    except (JWTError, ValueError) as e:
        logger.info(f"Token decode error: {e}")
        return None
