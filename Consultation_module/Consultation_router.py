"""
Consultation router - public hero-section form and admin follow-up.
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
from .Consultation_model import ConsultationStatus
from .Consultation_schema import ConsultationCreate, ConsultationResponse, ConsultationListResponse
from .Consultation_crud import (
    create_consultation,
    get_consultation_by_id,
    list_consultations,
    update_consultation_status,
    delete_consultation,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/consultations", tags=["Consultations"])

SUCCESS_MESSAGE = "Consultation submitted successfully"


def _get_consultation_or_404(db: Session, consultation_id: int):
    consultation = get_consultation_by_id(db, consultation_id)
    if not consultation:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Consultation not found"
        )
    return consultation


@router.post("/public", response_model=ConsultationResponse, status_code=status.HTTP_201_CREATED)
def submit_consultation(
    data: ConsultationCreate,
    db: Session = Depends(get_db),
):
    """
    Submit a consultation request (no account needed).
    Name, email and mobile are required; address, pincode, state_slug and
    source are optional.
    """
    consultation = create_consultation(db, data)
    return {
        "success": True,
        "message": SUCCESS_MESSAGE,
        "data": consultation,
    }


@router.get("", response_model=ConsultationListResponse)
def list_all_consultations(
    status_filter: Optional[str] = Query(None, alias="status"),
    state_slug: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    items, total = list_consultations(db, status=status_filter, state_slug=state_slug, page=page, limit=limit)
    return {
        "success": True,
        "message": "Consultations retrieved successfully",
        "data": {"items": items, "pagination": build_pagination(page, limit, total)},
    }


@router.get("/{consultation_id}", response_model=ConsultationResponse)
def get_consultation(
    consultation_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    return {
        "success": True,
        "message": "Consultation retrieved successfully",
        "data": _get_consultation_or_404(db, consultation_id),
    }


@router.api_route(
    "/{consultation_id}/status",
    methods=["PUT", "PATCH"],
    response_model=ConsultationResponse,
)
def change_consultation_status(
    consultation_id: int,
    status_data: StatusUpdateRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """Valid statuses: pending, contacted, scheduled, completed, cancelled."""
    new_status = parse_status(ConsultationStatus, status_data.status)
    consultation = _get_consultation_or_404(db, consultation_id)
    consultation = update_consultation_status(db, consultation, new_status, status_data.notes)
    return {
        "success": True,
        "message": "Consultation status updated successfully",
        "data": consultation,
    }


@router.delete("/{consultation_id}", response_model=MessageResponse)
def remove_consultation(
    consultation_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    consultation = _get_consultation_or_404(db, consultation_id)
    delete_consultation(db, consultation)
    return {"success": True, "message": "Consultation deleted successfully"}
