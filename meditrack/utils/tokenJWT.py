# meditrack/utils/tokenJWT.py
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pymongo.database import Database

from meditrack.config import settings
from meditrack.database import USERS, get_db
from meditrack.schemas.auth import Principal
from meditrack.utils.permissions import Capability, has_capability

logger = logging.getLogger(__name__)

# Missing credentials are reported as 401 below, not by the scheme itself
bearer_scheme = HTTPBearer(auto_error=False)


# Generate a new JWT access token
def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


# Decode the bearer token into the request principal
def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Principal:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized access",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None or not credentials.credentials:
        raise credentials_exception
    try:
        payload = jwt.decode(credentials.credentials, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise credentials_exception

    email: Optional[str] = payload.get("email") or payload.get("sub")
    # Ensure email is present in the token payload
    if not email:
        raise credentials_exception
    return Principal(email=email)


# Dependency factory for capability based access control
def require_capability(capability: Capability):
    def _checker(
        principal: Principal = Depends(get_current_principal),
        db: Database = Depends(get_db),
    ) -> Principal:
        # No caching: the role is read on every request
        user = db[USERS].find_one({"email": principal.email}, {"role": 1})
        if user is None or not has_capability(user.get("role"), capability):
            logger.warning("Forbidden: %s lacks %s", principal.email, capability.value)
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden access")
        return principal
    return _checker


def ensure_self(principal: Principal, email: Optional[str]) -> None:
    """Reject requests that address another user's email."""
    if not email or principal.email.lower() != email.strip().lower():
        logger.warning("Forbidden: %s addressed %s", principal.email, email)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden access")
