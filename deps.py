"""
Dependencies for FastAPI routes.
"""
from fastapi import Request
from sqlalchemy.orm import Session

from config import Settings


def get_db(request: Request):
    """
    Database session dependency.
    Sessions come from the factory owned by the application; the session is
    closed after the request whatever the outcome.
    """
    db: Session = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
