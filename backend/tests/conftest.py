"""Shared test fixtures"""

import os

# Must be set before the application modules read their settings
os.environ.setdefault("SQLALCHEMY_DATABASE_URL", "sqlite://")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from brewshare.main import app
from brewshare.models import User
from brewshare.models.base import Base
from brewshare.utils.auth import get_password_hash
from brewshare.utils.database import build_engine, get_db

DEFAULT_PASSWORD = "testpass123"


@pytest.fixture
def db_session():
    """Create a test database session"""

    engine = build_engine("sqlite://")
    Base.metadata.create_all(engine)

    TestingSessionLocal = sessionmaker(bind=engine)
    session = TestingSessionLocal()

    yield session

    session.close()


@pytest.fixture
def make_user(db_session):
    """Insert users directly, bypassing the API"""

    def _make_user(username: str, is_admin: bool = False) -> User:
        user = User(
            username=username,
            email=f"{username}@example.com",
            password_hash=get_password_hash(DEFAULT_PASSWORD),
            is_admin=is_admin
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def test_db():
    """Create a test database and route the app's sessions to it"""

    engine = build_engine("sqlite://")
    Base.metadata.create_all(engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    yield TestingSessionLocal

    app.dependency_overrides.clear()


@pytest.fixture
def client(test_db):
    """Create a test client"""
    return TestClient(app)


@pytest.fixture
def make_client(test_db):
    """Factory for independent clients, each with its own cookie jar"""

    def _make_client() -> TestClient:
        return TestClient(app)

    return _make_client


def register(client: TestClient, username: str, password: str = DEFAULT_PASSWORD) -> dict:
    response = client.post(
        "/api/v1/auth/register",
        json={
            "username": username,
            "email": f"{username}@example.com",
            "password": password,
            "date_of_birth": "1990-05-17"
        }
    )
    assert response.status_code == 201, response.text
    return response.json()


def login(client: TestClient, username: str, password: str = DEFAULT_PASSWORD):
    return client.post(
        "/api/v1/auth/login",
        json={"email": f"{username}@example.com", "password": password}
    )


@pytest.fixture
def signed_in(make_client):
    """Register a user and return a client holding that user's session cookie"""

    def _signed_in(username: str):
        user_client = make_client()
        user = register(user_client, username)
        response = login(user_client, username)
        assert response.status_code == 200, response.text
        return user_client, user

    return _signed_in


@pytest.fixture
def promote_admin(test_db):
    """Set the admin flag on a user"""

    def _promote(user_id: int) -> None:
        session = test_db()
        try:
            session.query(User).filter(User.id == user_id).update({User.is_admin: True})
            session.commit()
        finally:
            session.close()

    return _promote
