"""
Test configuration for the clinic auth backend.
"""
import os

# Settings are read at import time, so the environment must be in place first
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ENVIRONMENT"] = "development"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from clinic_auth.config import settings
from clinic_auth.database import Base, build_engine, get_db
from clinic_auth.main import app

# Test database URL
TEST_DATABASE_URL = "sqlite:///./test.db"

# Create test database engine
engine = build_engine(TEST_DATABASE_URL, poolclass=StaticPool)

# Create test session factory
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db():
    """
    Create a fresh database for each test.
    """
    # Create tables
    Base.metadata.create_all(bind=engine)

    # Create session
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

    # Drop tables after test
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """
    Create a test client with a test database session.
    """
    def override_get_db():
        try:
            yield db
        finally:
            pass

    # Override the get_db dependency
    app.dependency_overrides[get_db] = override_get_db

    # Create test client
    with TestClient(app) as client:
        yield client

    # Remove dependency override
    app.dependency_overrides = {}


@pytest.fixture
def compensating_registration(monkeypatch):
    """
    Run registration without a shared transaction, relying on deleting the
    identity when its profile cannot be stored.
    """
    monkeypatch.setattr(settings, "transactional_registration", False)


@pytest.fixture
def nurse_signup():
    return {
        "name": "Alice",
        "email": "a@x.com",
        "age": 30,
        "password": "secret123",
        "role": "nurse",
        "department": "ER",
        "shift": "night",
    }


@pytest.fixture
def doctor_signup():
    return {
        "name": "Gregory House",
        "email": "house@clinic.org",
        "age": 52,
        "password": "vicodin42",
        "role": "doctor",
        "specialization": "Diagnostics",
        "experience": 20,
        "availability": {
            "days": ["Monday", "wednesday", "Friday", "monday"],
            "workingHours": {"start": "09:00", "end": "17:00"},
        },
        "consultationFee": 250,
    }


@pytest.fixture
def patient_signup():
    return {
        "name": "Bob Patient",
        "email": "Bob@Mercy-Hospital.com",
        "age": 41,
        "password": "hunter22",
        "role": "patient",
        "bloodGroup": "O+",
        "allergies": "penicillin",
    }


@pytest.fixture
def split_signup():
    """Separate identity fields from role profile fields of a signup body."""
    identity_keys = ("name", "email", "age", "password", "role")

    def split(payload):
        identity = {key: payload.get(key) for key in identity_keys}
        role_fields = {key: value for key, value in payload.items() if key not in identity_keys}
        return identity, role_fields
    return split
