"""
Pytest configuration and fixtures

Tests run against an in-memory SQLite database. Tables are created fresh
for every test and dropped afterwards, so nothing leaks between tests.
"""
import os

# Must be set before the application modules read their configuration
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

from strength_analytics.database import SessionLocal, engine, metadata
from strength_analytics.main import app
from strength_analytics.services.models import UserProfile, WeightUnit


@pytest.fixture(scope="function")
def db_session():
    """Session bound to a freshly created schema"""
    metadata.create_all(bind=engine)
    session = SessionLocal()

    yield session

    session.close()
    metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """API client sharing the test database"""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def male_profile():
    """30 year old male, 80 kg"""
    return UserProfile(gender="Male", age=30, weight_value=80, weight_unit=WeightUnit.KG)


@pytest.fixture
def female_profile():
    """30 year old female, 60 kg, 25 kg skeletal muscle mass"""
    return UserProfile(
        gender="Female",
        age=30,
        weight_value=60,
        weight_unit=WeightUnit.KG,
        skeletal_muscle_mass_value=25,
        skeletal_muscle_mass_unit=WeightUnit.KG,
    )
