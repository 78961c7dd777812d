import os

# Keep the module-level app in main.py away from real infrastructure
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["REDIS_URL"] = ""
os.environ["RUN_MIGRATIONS"] = "false"
os.environ["SEED_REFERENCE_DATA"] = "false"
os.environ["JWT_SECRET"] = "test-secret"

import pytest
from fastapi.testclient import TestClient

from config import Settings
from database import Base, build_engine, register_models
from main import create_app
from Login_module.User.user_model import UserRole
from Login_module.User.user_session_crud import create_user
from Login_module.Utils.rate_limiter import MemoryRateLimitStore
from Login_module.Utils.security import create_user_token
from Service_module.Service_crud import seed_default_services, get_service_by_slug
from State_module.State_crud import seed_default_states, get_state_by_slug


def make_settings(**overrides) -> Settings:
    values = {
        "ENVIRONMENT": "test",
        "DATABASE_URL": "sqlite://",
        "REDIS_URL": None,
        "JWT_SECRET": "test-secret",
        "RATE_LIMIT_MAX_REQUESTS": 10000,
        "RATE_LIMIT_AUTH_MAX_REQUESTS": 10000,
        "RUN_MIGRATIONS": False,
        "SEED_REFERENCE_DATA": False,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def engine(settings):
    register_models()
    engine = build_engine(settings)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def app(settings, engine):
    return create_app(settings, engine=engine, rate_limit_store=MemoryRateLimitStore())


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def db(app):
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def reference_data(db):
    seed_default_services(db)
    seed_default_states(db)
    return {
        "service_id": get_service_by_slug(db, "seamless-online-filing").id,
        "state_id": get_state_by_slug(db, "delhi").id,
    }


@pytest.fixture
def admin_user(db):
    return create_user(db, "admin@filemyrti.com", name="Admin", role=UserRole.ADMIN.value)


@pytest.fixture
def regular_user(db):
    return create_user(db, "asha@example.com", name="Asha Verma", mobile="9876543210")


@pytest.fixture
def other_user(db):
    return create_user(db, "vikram@example.com", name="Vikram Rao", mobile="9123456780")


def bearer(user, settings, expires_delta=None):
    return {"Authorization": f"Bearer {create_user_token(user, settings, expires_delta)}"}


@pytest.fixture
def admin_headers(admin_user, settings):
    return bearer(admin_user, settings)


@pytest.fixture
def user_headers(regular_user, settings):
    return bearer(regular_user, settings)


@pytest.fixture
def other_headers(other_user, settings):
    return bearer(other_user, settings)


@pytest.fixture
def token_headers(settings):
    def _headers(user, expires_delta=None):
        return bearer(user, settings, expires_delta)
    return _headers
