"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown (in-memory SQLite)
- FastAPI test client
- Seed data: companies c1-c3, jobs j1-j3, users u1 (regular) and u2 (admin)
- Bearer headers for both users
"""

import sqlite3
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db
from app.core.security import create_access_token
from app.crud import company as company_crud
from app.crud import job as job_crud
from app.crud import user as user_crud
from app.models import Company, Job, User  # noqa: F401  registers tables
from app.schemas.company import CompanyCreateRequest
from app.schemas.job import JobCreateRequest
from app.schemas.user import UserRegisterRequest
from main import app

# sqlite3 has no native Decimal binding (psycopg2 does)
sqlite3.register_adapter(Decimal, str)

# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    """
    Create a fresh database for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def seeded(db_session):
    """
    Seed three companies, three jobs and two users.

    Returns:
        {"job_ids": [j1, j2, j3]}
    """
    for n in (1, 2, 3):
        company_crud.create(db_session, CompanyCreateRequest(
            handle=f"c{n}",
            name=f"C{n}",
            description=f"Desc{n}",
            num_employees=n,
            logo_url=f"http://c{n}.img",
        ))

    jobs = [
        JobCreateRequest(title="j1", salary=100000, equity=Decimal("0"), company_handle="c1"),
        JobCreateRequest(title="j2", salary=200000, equity=Decimal("0.1"), company_handle="c2"),
        JobCreateRequest(title="j3", salary=300000, equity=Decimal("0.2"), company_handle="c2"),
    ]
    job_ids = [job_crud.create(db_session, job)["id"] for job in jobs]

    user_crud.register(db_session, UserRegisterRequest(
        username="u1",
        password="password1",
        first_name="U1F",
        last_name="U1L",
        email="user1@user.com",
    ))
    user_crud.register(db_session, UserRegisterRequest(
        username="u2",
        password="password2",
        first_name="U2F",
        last_name="U2L",
        email="user2@user.com",
    ), is_admin=True)

    return {"job_ids": job_ids}


@pytest.fixture
def job_ids(seeded):
    """Ids of j1, j2, j3 in that order"""
    return seeded["job_ids"]


@pytest.fixture
def user_headers():
    """Bearer headers for u1 (not an admin)"""
    return {"Authorization": f"Bearer {create_access_token('u1', is_admin=False)}"}


@pytest.fixture
def admin_headers():
    """Bearer headers for u2 (admin)"""
    return {"Authorization": f"Bearer {create_access_token('u2', is_admin=True)}"}
