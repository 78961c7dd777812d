from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict

from Login_module.User.user_model import User
from Login_module.Utils.auth_user import get_current_user

router = APIRouter(prefix="/api/v1/auth", tags=["Auth"])


class PrincipalData(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: Optional[str] = None
    email: Optional[str] = None
    role: str


class PrincipalResponse(BaseModel):
    success: bool = True
    message: str
    data: PrincipalData


@router.get("/profile", response_model=PrincipalResponse)
def get_profile(current_user: User = Depends(get_current_user)):
    """Return the principal the bearer token resolves to."""
    return {
        "success": True,
        "message": "Profile retrieved successfully",
        "data": current_user,
    }
