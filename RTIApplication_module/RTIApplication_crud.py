from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from typing import List, Optional, Tuple, Union
import logging

from .RTIApplication_model import RTIApplication, RTIApplicationStatus
from .RTIApplication_schema import RTIApplicationPublicCreate, RTIApplicationCreate, RTIApplicationUpdate

logger = logging.getLogger(__name__)


def _commit(db: Session) -> None:
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise


def create_rti_application(
    db: Session,
    data: Union[RTIApplicationPublicCreate, RTIApplicationCreate],
    user_id: Optional[int] = None,
) -> RTIApplication:
    """
    Create a new RTI application with status 'pending'.
    Identical submissions are stored as separate applications.
    """
    application = RTIApplication(
        **data.model_dump(),
        user_id=user_id,
        status=RTIApplicationStatus.PENDING.value,
    )
    db.add(application)
    _commit(db)
    db.refresh(application)
    logger.info(
        f"RTI application created: id={application.id}, email={application.email}, "
        f"user_id={user_id if user_id is not None else 'public'}"
    )
    return application


def get_rti_application_by_id(db: Session, application_id: int) -> Optional[RTIApplication]:
    return db.query(RTIApplication).filter(RTIApplication.id == application_id).first()


def list_rti_applications(
    db: Session,
    status: Optional[str] = None,
    service_id: Optional[int] = None,
    state_id: Optional[int] = None,
    user_id: Optional[int] = None,
    page: int = 1,
    limit: int = 10,
) -> Tuple[List[RTIApplication], int]:
    """Filtered, newest-first page of applications plus the total match count."""
    query = db.query(RTIApplication)

    if status:
        query = query.filter(RTIApplication.status == status)
    if service_id:
        query = query.filter(RTIApplication.service_id == service_id)
    if state_id:
        query = query.filter(RTIApplication.state_id == state_id)
    if user_id is not None:
        query = query.filter(RTIApplication.user_id == user_id)

    total = query.count()
    items = (
        query.order_by(RTIApplication.created_at.desc(), RTIApplication.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return items, total


def update_rti_application(
    db: Session,
    application: RTIApplication,
    data: RTIApplicationUpdate,
) -> RTIApplication:
    changes = data.model_dump(exclude_unset=True)
    for field, value in changes.items():
        setattr(application, field, value)
    _commit(db)
    db.refresh(application)
    logger.info(f"RTI application updated: id={application.id}, fields={sorted(changes)}")
    return application


def update_rti_application_status(
    db: Session,
    application: RTIApplication,
    new_status: RTIApplicationStatus,
    notes: Optional[str] = None,
) -> RTIApplication:
    old_status = application.status
    application.status = new_status.value
    if notes is not None:
        application.notes = notes
    _commit(db)
    db.refresh(application)
    logger.info(f"RTI application status updated: id={application.id}, {old_status} -> {new_status.value}")
    return application


def delete_rti_application(db: Session, application: RTIApplication) -> None:
    application_id = application.id
    db.delete(application)
    _commit(db)
    logger.info(f"RTI application deleted: id={application_id}")
