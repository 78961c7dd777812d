from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from deps import get_db
from .Service_schema import ServiceListResponse, ServiceResponse
from .Service_crud import get_services, get_service_by_slug

router = APIRouter(prefix="/api/v1/services", tags=["Services"])


@router.get("", response_model=ServiceListResponse)
def list_services(db: Session = Depends(get_db)):
    return {
        "success": True,
        "message": "Services retrieved successfully",
        "data": get_services(db),
    }


@router.get("/{slug}", response_model=ServiceResponse)
def get_service(slug: str, db: Session = Depends(get_db)):
    service = get_service_by_slug(db, slug)
    if not service:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Service not found")
    return {
        "success": True,
        "message": "Service retrieved successfully",
        "data": service,
    }
