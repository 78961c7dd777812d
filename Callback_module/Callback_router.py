"""
Callback request router - public "call me back" form and admin follow-up.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from deps import get_db
from Login_module.User.user_model import User
from Login_module.Utils.auth_user import require_admin
from Validation_module.status_workflow import StatusUpdateRequest, parse_status
from responses import MessageResponse, build_pagination
from .Callback_model import CallbackStatus
from .Callback_schema import CallbackRequestCreate, CallbackRequestResponse, CallbackRequestListResponse
from .Callback_crud import (
    create_callback_request,
    get_callback_request_by_id,
    list_callback_requests,
    update_callback_request_status,
    delete_callback_request,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/callback-requests", tags=["Callback Requests"])


def _get_callback_or_404(db: Session, callback_id: int):
    callback = get_callback_request_by_id(db, callback_id)
    if not callback:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Callback request not found"
        )
    return callback


@router.post("/public", response_model=CallbackRequestResponse, status_code=status.HTTP_201_CREATED)
def submit_callback_request(
    data: CallbackRequestCreate,
    db: Session = Depends(get_db),
):
    """Request a call back (no account needed). Only the phone number is required."""
    callback = create_callback_request(db, data)
    return {
        "success": True,
        "message": "Callback request submitted successfully",
        "data": callback,
    }


@router.get("", response_model=CallbackRequestListResponse)
def list_all_callback_requests(
    status_filter: Optional[str] = Query(None, alias="status"),
    state_slug: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    items, total = list_callback_requests(db, status=status_filter, state_slug=state_slug, page=page, limit=limit)
    return {
        "success": True,
        "message": "Callback requests retrieved successfully",
        "data": {"items": items, "pagination": build_pagination(page, limit, total)},
    }


@router.get("/{callback_id}", response_model=CallbackRequestResponse)
def get_callback_request(
    callback_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    return {
        "success": True,
        "message": "Callback request retrieved successfully",
        "data": _get_callback_or_404(db, callback_id),
    }


@router.api_route(
    "/{callback_id}/status",
    methods=["PUT", "PATCH"],
    response_model=CallbackRequestResponse,
)
def change_callback_request_status(
    callback_id: int,
    status_data: StatusUpdateRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """Valid statuses: pending, contacted, completed, cancelled."""
    new_status = parse_status(CallbackStatus, status_data.status)
    callback = _get_callback_or_404(db, callback_id)
    callback = update_callback_request_status(db, callback, new_status, status_data.notes)
    return {
        "success": True,
        "message": "Callback request status updated successfully",
        "data": callback,
    }


@router.delete("/{callback_id}", response_model=MessageResponse)
def remove_callback_request(
    callback_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    callback = _get_callback_or_404(db, callback_id)
    delete_callback_request(db, callback)
    return {"success": True, "message": "Callback request deleted successfully"}
