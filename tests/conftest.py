"""Pytest fixtures for testing"""

import random
import pytest
from datetime import date
from types import SimpleNamespace
from typing import Any, Dict, Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from loan_portfolio.api.main import create_app
from loan_portfolio.infrastructure.database.models import Base
from loan_portfolio.infrastructure.database.repositories import LoanRepository, PaymentRepository
from loan_portfolio.infrastructure.database.session import get_db
from loan_portfolio.services.loans import LoanService


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


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
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def loan_service(db: Session) -> LoanService:
    """Loan service with a seeded payment simulation"""
    return LoanService(LoanRepository(db), PaymentRepository(db), random.Random(42))


@pytest.fixture
def mortgage_fields() -> Dict[str, Any]:
    """30-year mortgage: credit 780, LTV 83.3%, 4.5%, 360 months -> score 35 (medium)"""
    return {
        "name": "Home Mortgage",
        "amount": 250000.0,
        "interest_rate": 4.5,
        "term": 360,
        "start_date": date(2023, 1, 15),
        "end_date": date(2053, 1, 15),
        "status": "active",
        "borrower_name": "John Smith",
        "borrower_email": "john.smith@example.com",
        "description": "30-year fixed rate mortgage for primary residence",
        "credit_score": 780,
        "collateral": 300000.0,
    }


@pytest.fixture
def short_loan_fields() -> Dict[str, Any]:
    """12-month defaulted loan: credit 620, no collateral, 9%, 12 months -> score 70 (high)"""
    return {
        "name": "Bridge Loan",
        "amount": 12000.0,
        "interest_rate": 9.0,
        "term": 12,
        "start_date": date(2024, 1, 31),
        "end_date": date(2025, 1, 31),
        "status": "defaulted",
        "borrower_name": "Jane Doe",
        "borrower_email": "jane.doe@example.com",
        "credit_score": 620,
    }


@pytest.fixture
def make_loan():
    """Factory for loan-like objects fed to the pure payment generator"""

    def _make_loan(**overrides) -> SimpleNamespace:
        fields = {
            "amount": 12000.0,
            "interest_rate": 6.0,
            "term": 12,
            "start_date": date(2024, 1, 15),
            "status": "pending",
        }
        fields.update(overrides)
        return SimpleNamespace(**fields)

    return _make_loan
