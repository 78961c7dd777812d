from datetime import timedelta
from typing import Dict, Any, Optional

import jwt
from fastapi import HTTPException, status

from config import Settings
from Login_module.Utils.datetime_utils import now_ist


def create_access_token(data: Dict[str, Any], settings: Settings, expires_delta: Optional[int] = None) -> str:
    """
    Creates a JWT access token with expiration timestamp.
    """
    to_encode = data.copy()
    expire = now_ist() + timedelta(
        seconds=(expires_delta or settings.JWT_EXPIRE_SECONDS)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def create_user_token(user, settings: Settings, expires_delta: Optional[int] = None) -> str:
    return create_access_token({"sub": str(user.id), "role": user.role}, settings, expires_delta)


def decode_access_token(token: str, settings: Settings) -> Dict[str, Any]:
    """
    Decodes and validates JWT access token.
    Raises HTTPException (401) for invalid or expired tokens.
    """
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token expired")
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
