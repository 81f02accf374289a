from datetime import datetime, timedelta, timezone
from jose import jwt

from app.core.config import settings

ALGORITHM = "HS256"

def create_jwt(payload: dict, secret: str, expires_delta: timedelta) -> str:
    now = datetime.now(timezone.utc)
    data = payload.copy()
    data.update({"iat": int(now.timestamp()), "exp": int((now + expires_delta).timestamp())})
    return jwt.encode(data, secret, algorithm=ALGORITHM)

def decode_jwt(token: str, secret: str) -> dict:
    return jwt.decode(token, secret, algorithms=[ALGORITHM])

def create_admin_token(
    *,
    sub: str,
    email: str,
    role: str,
    church_id: str | None,
    expires_delta: timedelta | None = None,
) -> str:
    claims = {"sub": str(sub), "email": email, "role": role}
    if church_id:
        claims["church_id"] = str(church_id)
    ttl = expires_delta or timedelta(minutes=settings.ADMIN_JWT_TTL_MINUTES)
    return create_jwt(claims, settings.ADMIN_JWT_SECRET, ttl)
