from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from typing import List, Optional, Tuple
import logging

from .Consultation_model import Consultation, ConsultationStatus
from .Consultation_schema import ConsultationCreate

logger = logging.getLogger(__name__)


def _commit(db: Session) -> None:
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise


def create_consultation(db: Session, data: ConsultationCreate) -> Consultation:
    """Create a new consultation request with status 'pending'."""
    consultation = Consultation(**data.model_dump(), status=ConsultationStatus.PENDING.value)
    db.add(consultation)
    _commit(db)
    db.refresh(consultation)
    logger.info(f"Consultation created: id={consultation.id}, email={consultation.email}")
    return consultation


def get_consultation_by_id(db: Session, consultation_id: int) -> Optional[Consultation]:
    return db.query(Consultation).filter(Consultation.id == consultation_id).first()


def list_consultations(
    db: Session,
    status: Optional[str] = None,
    state_slug: Optional[str] = None,
    page: int = 1,
    limit: int = 10,
) -> Tuple[List[Consultation], int]:
    query = db.query(Consultation)
    if status:
        query = query.filter(Consultation.status == status)
    if state_slug:
        query = query.filter(Consultation.state_slug == state_slug.strip().lower())

    total = query.count()
    items = (
        query.order_by(Consultation.created_at.desc(), Consultation.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return items, total


def update_consultation_status(
    db: Session,
    consultation: Consultation,
    new_status: ConsultationStatus,
    notes: Optional[str] = None,
) -> Consultation:
    old_status = consultation.status
    consultation.status = new_status.value
    if notes is not None:
        consultation.notes = notes
    _commit(db)
    db.refresh(consultation)
    logger.info(f"Consultation status updated: id={consultation.id}, {old_status} -> {new_status.value}")
    return consultation


def delete_consultation(db: Session, consultation: Consultation) -> None:
    consultation_id = consultation.id
    db.delete(consultation)
    _commit(db)
    logger.info(f"Consultation deleted: id={consultation_id}")
