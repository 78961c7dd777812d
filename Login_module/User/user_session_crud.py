from sqlalchemy.orm import Session
from typing import Optional
import logging

from .user_model import User, UserRole

logger = logging.getLogger(__name__)


def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
    """
    Retrieve user by ID.
    """
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """
    Retrieve user by email.
    """
    return db.query(User).filter(User.email == email.strip().lower()).first()


def create_user(
    db: Session,
    email: str,
    name: Optional[str] = None,
    mobile: Optional[str] = None,
    role: str = UserRole.USER.value,
) -> User:
    """
    Create a new user account.
    """
    user = User(email=email.strip().lower(), name=name, mobile=mobile, role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"User created: id={user.id}, role={user.role}")
    return user
