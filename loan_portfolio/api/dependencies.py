"""Dependency injection for FastAPI endpoints"""

import random
from fastapi import Depends, Request
from sqlalchemy.orm import Session
from loan_portfolio.config import settings
from loan_portfolio.infrastructure.database.repositories import LoanRepository, PaymentRepository
from loan_portfolio.infrastructure.database.session import get_db
from loan_portfolio.services.loans import LoanService


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_payment_rng() -> random.Random:
    """Randomness for simulated payment history, seeded when configured"""
    return random.Random(settings.payment_seed)


def get_loan_service(
    db: Session = Depends(get_db),
    rng: random.Random = Depends(get_payment_rng),
) -> LoanService:
    """Provide a loan service bound to the request's session"""
    return LoanService(LoanRepository(db), PaymentRepository(db), rng)
