# storefront/api/auth.py
import jwt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from storefront.services.access import Caller, normalize_user_id
from storefront.utils import settings

bearer_scheme = HTTPBearer(auto_error=False)


def verify_token(token: str) -> Caller:
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.PyJWTError:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    user_id = normalize_user_id(payload.get("id", payload.get("userId")))
    if user_id is None:
        raise HTTPException(status_code=401, detail="Invalid token")

    role = str(payload.get("userType") or payload.get("role") or "customer").lower()
    return Caller(user_id=user_id, role=role)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Caller:
    if credentials is None or not credentials.credentials:
        raise HTTPException(status_code=401, detail="Access token required")
    return verify_token(credentials.credentials)
