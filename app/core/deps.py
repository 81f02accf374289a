from uuid import UUID

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.core.config import settings
from app.core.security import decode_jwt

bearer = HTTPBearer(auto_error=False)

def get_current_admin(creds: HTTPAuthorizationCredentials = Depends(bearer)) -> dict:
    if not creds:
        raise HTTPException(status_code=401, detail="Missing authorization token")
    try:
        return decode_jwt(creds.credentials, settings.ADMIN_JWT_SECRET)
    except Exception:
        raise HTTPException(status_code=401, detail="Invalid token")

def require_role(*roles: str):
    def _inner(admin: dict = Depends(get_current_admin)) -> dict:
        if admin.get("role") not in roles:
            raise HTTPException(status_code=403, detail="Insufficient permissions")
        return admin
    return _inner

def church_id_from_claims(admin: dict) -> UUID:
    raw = str(admin.get("church_id") or "").strip()
    if not raw:
        raise HTTPException(status_code=403, detail="Token is not bound to a ministry")
    try:
        return UUID(raw)
    except ValueError:
        raise HTTPException(status_code=403, detail="Token is not bound to a ministry")

def responsible_from_claims(admin: dict) -> str:
    return str(admin.get("email") or "").strip() or "System administrator"

def tenant_scope(*roles: str):
    """Resolve the caller's church for tenant-scoped routes.

    The church id is also stored on ``request.state`` so the request log line
    can carry it.
    """

    def _inner(request: Request, admin: dict = Depends(require_role(*roles))) -> tuple[UUID, dict]:
        church_id = church_id_from_claims(admin)
        request.state.church_id = str(church_id)
        return church_id, admin
    return _inner
