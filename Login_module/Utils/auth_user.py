from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from config import Settings
from deps import get_db, get_app_settings
from Login_module.Utils import security
from Login_module.User.user_model import User
from Login_module.User.user_session_crud import get_user_by_id

# auto_error=False so a missing token is reported as 401 by get_current_user
security_scheme = HTTPBearer(auto_error=False)

UNAUTHORIZED_HEADERS = {"WWW-Authenticate": "Bearer"}


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_scheme),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> User:
    """
    Validates the bearer token and returns the authenticated user.
    Missing, invalid or expired tokens are 401; inactive accounts are 403.
    """
    if not credentials or not credentials.credentials or not credentials.credentials.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers=UNAUTHORIZED_HEADERS,
        )

    payload = security.decode_access_token(credentials.credentials.strip(), settings)

    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token does not contain user info",
            headers=UNAUTHORIZED_HEADERS,
        )

    try:
        user = get_user_by_id(db, int(user_id))
    except (TypeError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid user ID format in token",
            headers=UNAUTHORIZED_HEADERS,
        )

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers=UNAUTHORIZED_HEADERS,
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is inactive"
        )

    return user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Allow only principals with the admin role."""
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )
    return current_user


def ensure_owner_or_admin(current_user: User, owner_id: Optional[int]) -> None:
    """
    Admins pass; anyone else must own the record.
    Records without an owner (public submissions) are admin-only.
    """
    if current_user.is_admin:
        return
    if owner_id is None or owner_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied"
        )
