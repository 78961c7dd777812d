from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from typing import List, Optional
import logging

from .State_model import State
from .State_schema import StateCreate, StateUpdate

logger = logging.getLogger(__name__)

DELHI_STATE = {
    "slug": "delhi",
    "name": "Delhi",
    "languages": ["English", "Hindi"],
    "hero": {
        "title": "File RTI Online in Delhi - Simplest Way to Get Government Information",
        "subtitle": "Submit RTI applications for any Delhi government department. "
                    "We handle drafting, formatting, and submission for you.",
        "image": "/images/delhi-banner.jpg",
        "cta": "File Delhi RTI Now",
    },
    "departments": [
        "Delhi Police",
        "Municipal Corporation of Delhi (MCD)",
        "Delhi Revenue Department",
        "Delhi Education Department",
        "Delhi Jal Board (DJB)",
        "Delhi Transport Department",
        "Delhi Public Works Department (PWD)",
    ],
    "highlights": [
        "RTI governed by Delhi Information Commission (DIC)",
        "Applications can be filed in English or Hindi",
    ],
    "faqs": [
        {"q": "Can I file RTI in Hindi?", "a": "Yes, RTIs in Delhi can be filed in English or Hindi."},
        {"q": "How long does it take to get a response?",
         "a": "Typically, government departments respond within 30 days as per RTI Act guidelines."},
    ],
    "process_steps": [
        {"step": 1, "title": "Tell Us Your Query",
         "description": "Share what information you need from the Delhi government department."},
        {"step": 2, "title": "We Draft Your RTI",
         "description": "Our experts draft a professional RTI application in English or Hindi."},
        {"step": 3, "title": "We Submit It",
         "description": "We handle the submission, fee payment, and tracking for you."},
        {"step": 4, "title": "Get Your Response",
         "description": "Receive the information directly from the department within 30 days."},
    ],
    "commission": "Delhi Information Commission (DIC)",
    "fee": "₹10",
}


def _commit(db: Session) -> None:
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise


def get_states(db: Session, include_inactive: bool = False) -> List[State]:
    query = db.query(State)
    if not include_inactive:
        query = query.filter(State.is_active == True)  # noqa: E712
    return query.order_by(State.name.asc()).all()


def get_state_by_slug(db: Session, slug: str) -> Optional[State]:
    return db.query(State).filter(State.slug == slug.strip().lower()).first()


def get_state_by_id(db: Session, state_id: int) -> Optional[State]:
    return db.query(State).filter(State.id == state_id).first()


def create_state(db: Session, data: StateCreate) -> State:
    state = State(**data.model_dump())
    db.add(state)
    _commit(db)
    db.refresh(state)
    logger.info(f"State created: id={state.id}, slug={state.slug}")
    return state


def update_state(db: Session, state: State, data: StateUpdate) -> State:
    changes = data.model_dump(exclude_unset=True)
    for field, value in changes.items():
        setattr(state, field, value)
    _commit(db)
    db.refresh(state)
    logger.info(f"State updated: id={state.id}, fields={sorted(changes)}")
    return state


def delete_state(db: Session, state: State) -> None:
    state_id = state.id
    db.delete(state)
    _commit(db)
    logger.info(f"State deleted: id={state_id}")


def seed_default_states(db: Session) -> int:
    if get_state_by_slug(db, DELHI_STATE["slug"]):
        return 0
    db.add(State(**DELHI_STATE))
    _commit(db)
    logger.info("Seeded default state: delhi")
    return 1
