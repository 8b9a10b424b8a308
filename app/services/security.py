import datetime as dt
import logging
from typing import Optional

from jose import jwt, JWTError
from fastapi import HTTPException, status, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from argon2 import PasswordHasher
from argon2.exceptions import VerificationError, InvalidHashError
from app.config import settings
from app.models.user import User

log = logging.getLogger(__name__)

bearer = HTTPBearer(auto_error=False)
ph = PasswordHasher()

DEV_JWT_SECRET = "dev-jwt-secret-change-me-very-long-32-chars-minimum"


class AuthUser:
    def __init__(self, user_id: str, email: Optional[str] = None):
        self.user_id = user_id
        self.email = email


def _jwt_secret() -> str:
    secret = (settings.JWT_SECRET or "").strip()
    if len(secret) >= 32:
        return secret
    # In non-production, fall back to a safe dev secret to avoid 500s in tests
    if (settings.APP_ENV or "").strip().lower() != "production":
        return DEV_JWT_SECRET
    raise ValueError("JWT_SECRET must be at least 32 characters long")


def create_token(user_id: str) -> str:
    now = dt.datetime.now(dt.timezone.utc)
    exp = now + dt.timedelta(minutes=settings.ACCESS_TOKEN_EXPIRES_MIN)
    payload = {"sub": user_id, "iat": int(now.timestamp()), "exp": int(exp.timestamp())}
    return jwt.encode(payload, _jwt_secret(), algorithm="HS256")


def decode_token(token: str) -> str:
    """Return the user id carried by a valid access token."""
    payload = jwt.decode(
        token,
        _jwt_secret(),
        algorithms=["HS256"],
        options={"leeway": 30},  # 30s clock skew tolerance
    )
    return str(payload["sub"])


def verify_password(pw: str, pw_hash: str) -> bool:
    try:
        return ph.verify(pw_hash, pw)
    except (VerificationError, InvalidHashError):
        return False


def hash_password(pw: str) -> str:
    return ph.hash(pw)


async def _resolve_user(token: str) -> Optional[AuthUser]:
    try:
        user_id = decode_token(token)
    except (JWTError, KeyError):
        return None
    db_user = await User.filter(id=user_id).first()
    if not db_user:
        return None
    return AuthUser(str(db_user.id), db_user.email)


async def require_user(creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer)) -> AuthUser:
    if not creds or creds.scheme.lower() != "bearer":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    user = await _resolve_user(creds.credentials)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    return user


async def optional_user(creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer)) -> Optional[AuthUser]:
    """Current user when a valid bearer token is present, else None."""
    if not creds or creds.scheme.lower() != "bearer":
        return None
    return await _resolve_user(creds.credentials)
