"""
RTI application router - public and signed-in submissions, owner access and
admin status management.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from deps import get_db
from Login_module.User.user_model import User
from Login_module.Utils.auth_user import get_current_user, require_admin, ensure_owner_or_admin
from Validation_module.status_workflow import StatusUpdateRequest, parse_status
from responses import MessageResponse, build_pagination
from .RTIApplication_model import RTIApplicationStatus
from .RTIApplication_schema import (
    RTIApplicationPublicCreate,
    RTIApplicationCreate,
    RTIApplicationUpdate,
    RTIApplicationResponse,
    RTIApplicationListResponse,
)
from .RTIApplication_crud import (
    create_rti_application,
    get_rti_application_by_id,
    list_rti_applications,
    update_rti_application,
    update_rti_application_status,
    delete_rti_application,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/rti-applications", tags=["RTI Applications"])


def _get_application_or_404(db: Session, application_id: int):
    application = get_rti_application_by_id(db, application_id)
    if not application:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Application not found"
        )
    return application


def _page_payload(items, page: int, limit: int, total: int):
    return {"items": items, "pagination": build_pagination(page, limit, total)}


@router.post("/public", response_model=RTIApplicationResponse, status_code=status.HTTP_201_CREATED)
def submit_application_public(
    data: RTIApplicationPublicCreate,
    db: Session = Depends(get_db),
):
    """
    Submit an RTI application without an account.
    The application has no owner, so only admins can manage it afterwards.
    """
    application = create_rti_application(db, data, user_id=None)
    return {
        "success": True,
        "message": "RTI application created successfully",
        "data": application,
    }


@router.post("", response_model=RTIApplicationResponse, status_code=status.HTTP_201_CREATED)
def submit_application(
    data: RTIApplicationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Submit an RTI application owned by the signed-in user."""
    application = create_rti_application(db, data, user_id=current_user.id)
    return {
        "success": True,
        "message": "RTI application created successfully",
        "data": application,
    }


@router.get("", response_model=RTIApplicationListResponse)
def list_applications(
    status_filter: Optional[str] = Query(None, alias="status", description="Filter by status"),
    service_id: Optional[int] = Query(None, ge=1),
    state_id: Optional[int] = Query(None, ge=1),
    user_id: Optional[int] = Query(None, ge=1, description="Filter by owner (admin only)"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    List applications. Admins see everything (optionally filtered by owner);
    other users only see their own.
    """
    owner_filter = user_id if current_user.is_admin else current_user.id

    items, total = list_rti_applications(
        db,
        status=status_filter,
        service_id=service_id,
        state_id=state_id,
        user_id=owner_filter,
        page=page,
        limit=limit,
    )
    return {
        "success": True,
        "message": "Applications retrieved successfully",
        "data": _page_payload(items, page, limit, total),
    }


@router.get("/my-applications", response_model=RTIApplicationListResponse)
def list_my_applications(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    items, total = list_rti_applications(db, user_id=current_user.id, page=page, limit=limit)
    return {
        "success": True,
        "message": "Applications retrieved successfully",
        "data": _page_payload(items, page, limit, total),
    }


@router.get("/{application_id}", response_model=RTIApplicationResponse)
def get_application(
    application_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    application = _get_application_or_404(db, application_id)
    ensure_owner_or_admin(current_user, application.user_id)
    return {
        "success": True,
        "message": "Application retrieved successfully",
        "data": application,
    }


@router.put("/{application_id}", response_model=RTIApplicationResponse)
def edit_application(
    application_id: int,
    data: RTIApplicationUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    application = _get_application_or_404(db, application_id)
    ensure_owner_or_admin(current_user, application.user_id)
    application = update_rti_application(db, application, data)
    return {
        "success": True,
        "message": "Application updated successfully",
        "data": application,
    }


@router.api_route(
    "/{application_id}/status",
    methods=["PUT", "PATCH"],
    response_model=RTIApplicationResponse,
)
def change_application_status(
    application_id: int,
    status_data: StatusUpdateRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """
    Move an application to any status (admin only).
    Valid statuses: pending, submitted, in_progress, completed, rejected.
    """
    new_status = parse_status(RTIApplicationStatus, status_data.status)
    application = _get_application_or_404(db, application_id)
    application = update_rti_application_status(db, application, new_status, status_data.notes)
    return {
        "success": True,
        "message": "Application status updated successfully",
        "data": application,
    }


@router.delete("/{application_id}", response_model=MessageResponse)
def remove_application(
    application_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    application = _get_application_or_404(db, application_id)
    ensure_owner_or_admin(current_user, application.user_id)
    delete_rti_application(db, application)
    return {"success": True, "message": "Application deleted successfully"}
