from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from .Service_model import Service

logger = logging.getLogger(__name__)

DEFAULT_SERVICES = [
    {"slug": "seamless-online-filing", "name": "Seamless Online Filing",
     "description": "We draft, file and track your RTI application end to end."},
    {"slug": "anonymous", "name": "Anonymous RTI",
     "description": "File an RTI without disclosing your identity to the department."},
    {"slug": "bulk", "name": "Bulk RTI",
     "description": "File the same query with several public authorities at once."},
    {"slug": "custom-rti", "name": "Custom RTI",
     "description": "A tailored RTI application drafted by our experts."},
    {"slug": "1st-appeal", "name": "1st Appeal",
     "description": "File a first appeal when the PIO does not respond or the reply is unsatisfactory."},
    {"slug": "15-minute-consultation", "name": "15 Minute Consultation",
     "description": "Talk to an RTI expert about your case."},
]


def get_services(db: Session, include_inactive: bool = False) -> List[Service]:
    query = db.query(Service)
    if not include_inactive:
        query = query.filter(Service.is_active == True)  # noqa: E712
    return query.order_by(Service.id.asc()).all()


def get_service_by_slug(db: Session, slug: str) -> Optional[Service]:
    return db.query(Service).filter(Service.slug == slug.strip().lower()).first()


def get_service_by_id(db: Session, service_id: int) -> Optional[Service]:
    return db.query(Service).filter(Service.id == service_id).first()


def seed_default_services(db: Session) -> int:
    """Insert catalogue entries that are missing. Returns how many were added."""
    existing = {slug for (slug,) in db.query(Service.slug).all()}
    added = 0
    for entry in DEFAULT_SERVICES:
        if entry["slug"] in existing:
            continue
        db.add(Service(**entry))
        added += 1
    if added:
        db.commit()
        logger.info(f"Seeded {added} default services")
    return added
