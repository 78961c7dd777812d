"""
State router - public state lookups and admin management of state pages.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from deps import get_db
from Login_module.User.user_model import User
from Login_module.Utils.auth_user import require_admin
from responses import MessageResponse
from .State_schema import StateCreate, StateUpdate, StateResponse, StateListResponse
from .State_crud import (
    get_states,
    get_state_by_slug,
    get_state_by_id,
    create_state,
    update_state,
    delete_state,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/states", tags=["States"])


def _get_state_or_404(db: Session, state_id: int):
    state = get_state_by_id(db, state_id)
    if not state:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="State not found")
    return state


@router.get("", response_model=StateListResponse)
def list_states(db: Session = Depends(get_db)):
    return {
        "success": True,
        "message": "States retrieved successfully",
        "data": get_states(db),
    }


@router.get("/{slug}", response_model=StateResponse)
def get_state(slug: str, db: Session = Depends(get_db)):
    state = get_state_by_slug(db, slug)
    if not state:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="State not found")
    return {
        "success": True,
        "message": "State retrieved successfully",
        "data": state,
    }


@router.post("", response_model=StateResponse, status_code=status.HTTP_201_CREATED)
def add_state(
    payload: StateCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """Create a state page (admin only). Slugs are unique."""
    if get_state_by_slug(db, payload.slug):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="State with this slug already exists"
        )
    state = create_state(db, payload)
    return {
        "success": True,
        "message": "State created successfully",
        "data": state,
    }


@router.put("/{state_id}", response_model=StateResponse)
def edit_state(
    state_id: int,
    payload: StateUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    state = _get_state_or_404(db, state_id)
    state = update_state(db, state, payload)
    return {
        "success": True,
        "message": "State updated successfully",
        "data": state,
    }


@router.delete("/{state_id}", response_model=MessageResponse)
def remove_state(
    state_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    state = _get_state_or_404(db, state_id)
    delete_state(db, state)
    return {"success": True, "message": "State deleted successfully"}
