from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from typing import List, Optional, Tuple
import logging

from .Callback_model import CallbackRequest, CallbackStatus
from .Callback_schema import CallbackRequestCreate

logger = logging.getLogger(__name__)


def _commit(db: Session) -> None:
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise


def create_callback_request(db: Session, data: CallbackRequestCreate) -> CallbackRequest:
    callback = CallbackRequest(
        phone=data.phone,
        state_slug=data.state_slug,
        status=CallbackStatus.PENDING.value,
    )
    db.add(callback)
    _commit(db)
    db.refresh(callback)
    logger.info(f"Callback request created: id={callback.id}, phone={callback.phone}")
    return callback


def get_callback_request_by_id(db: Session, callback_id: int) -> Optional[CallbackRequest]:
    return db.query(CallbackRequest).filter(CallbackRequest.id == callback_id).first()


def list_callback_requests(
    db: Session,
    status: Optional[str] = None,
    state_slug: Optional[str] = None,
    page: int = 1,
    limit: int = 10,
) -> Tuple[List[CallbackRequest], int]:
    query = db.query(CallbackRequest)
    if status:
        query = query.filter(CallbackRequest.status == status)
    if state_slug:
        query = query.filter(CallbackRequest.state_slug == state_slug.strip().lower())

    total = query.count()
    items = (
        query.order_by(CallbackRequest.created_at.desc(), CallbackRequest.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return items, total


def update_callback_request_status(
    db: Session,
    callback: CallbackRequest,
    new_status: CallbackStatus,
    notes: Optional[str] = None,
) -> CallbackRequest:
    old_status = callback.status
    callback.status = new_status.value
    if notes is not None:
        callback.notes = notes
    _commit(db)
    db.refresh(callback)
    logger.info(f"Callback request status updated: id={callback.id}, {old_status} -> {new_status.value}")
    return callback


def delete_callback_request(db: Session, callback: CallbackRequest) -> None:
    callback_id = callback.id
    db.delete(callback)
    _commit(db)
    logger.info(f"Callback request deleted: id={callback_id}")
