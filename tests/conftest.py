"""Pytest fixtures for testing"""

import pytest
from datetime import date
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from tradebill.api.main import create_app
from tradebill.api.dependencies import get_clock
from tradebill.infrastructure.database.models import Base
from tradebill.infrastructure.database.session import get_db
from tradebill.domain.interest import AnnualRatePolicy
from tradebill.domain.models import Bill


# Test database, shared in-memory connection
TEST_DATABASE_URL = "sqlite://"
engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Every test sees the same "today"
FROZEN_TODAY = date(2024, 7, 1)


@pytest.fixture
def today() -> date:
    return FROZEN_TODAY


@pytest.fixture
def clock():
    return lambda: FROZEN_TODAY


@pytest.fixture
def annual_policy() -> AnnualRatePolicy:
    return AnnualRatePolicy(default_rate=18.0)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session, clock) -> TestClient:
    """Create FastAPI test client with test database and frozen clock"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    return TestClient(app)


@pytest.fixture
def sample_bills() -> list[Bill]:
    """A small ledger covering every status as of FROZEN_TODAY"""
    return [
        # Within credit window, no receipt
        Bill(id=1, bill_date="15/06/2024", bill_no="B-101", party="Shree Textiles", net_amount=12000, credit_days=30),
        # Past credit window, no receipt
        Bill(id=2, bill_date="2024-03-01", bill_no="B-087", party="Shree Textiles", net_amount=25000, credit_days=30),
        Bill(id=3, bill_date="10/02/2024", bill_no="B-064", party="Om Traders", net_amount=40000, credit_days=45),
        # Received, interest outstanding
        Bill(
            id=4,
            bill_date="01/04/2024",
            bill_no="B-072",
            party="Mahalaxmi Fabrics",
            net_amount=15000,
            credit_days=30,
            rec_date="15/06/2024",
            rec_amount=15000,
            interest_paid="No",
        ),
        # Received, interest settled
        Bill(
            id=5,
            bill_date="2024-01-05",
            bill_no="B-041",
            party="Om Traders",
            net_amount=8000,
            credit_days=60,
            rec_date="2024-02-20",
            rec_amount=8000,
            interest_paid="Yes",
        ),
    ]
