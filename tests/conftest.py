from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from certportal.core.config import Settings
from certportal.main import create_app

ADMIN_EMAIL = "admin@certificados.com"
ADMIN_PASSWORD = "Admin@123"
SECRET = "tests-secret-key-0123456789"


@pytest.fixture
def settings():
    return Settings(
        DATABASE_URL="sqlite://",
        JWT_SECRET=SECRET,
        JWT_EXPIRES_IN="2h",
        BCRYPT_SALT_ROUNDS=4,
        ADMIN_EMAIL=ADMIN_EMAIL,
        ADMIN_PASSWORD=ADMIN_PASSWORD,
        AUTO_MIGRATE=False,
        METRICS_ENABLED=False,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture
def app(settings, engine):
    return create_app(settings=settings, engine=engine)


@pytest.fixture
def client(app):
    # o "with" dispara o startup (schema + admin de bootstrap)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(app, client):
    with app.state.session_factory() as session:
        yield session


@pytest.fixture
def admin_token(client):
    response = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return response.json()["token"]


@pytest.fixture
def admin_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def viewer_headers(app, client):
    # papel autenticado que não é ADMIN
    token = app.state.token_service.issue("someone", "VIEWER", ttl=timedelta(minutes=5))
    return {"Authorization": f"Bearer {token}"}
