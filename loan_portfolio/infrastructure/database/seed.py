"""Sample portfolio for local development

Usage:
    python -m loan_portfolio.infrastructure.database.seed
"""

import logging
import random
from datetime import date
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session

from loan_portfolio.config import settings
from loan_portfolio.infrastructure.database.models import Loan
from loan_portfolio.infrastructure.database.repositories import LoanRepository, PaymentRepository
from loan_portfolio.infrastructure.database.session import SessionLocal, init_db
from loan_portfolio.infrastructure.observability.logging import setup_logging
from loan_portfolio.services.loans import LoanService

SAMPLE_LOANS: List[Dict[str, Any]] = [
    {
        "name": "Home Mortgage",
        "amount": 250000,
        "interest_rate": 4.5,
        "term": 360,
        "start_date": date(2023, 1, 15),
        "end_date": date(2053, 1, 15),
        "status": "active",
        "borrower_name": "John Smith",
        "borrower_email": "john.smith@example.com",
        "description": "30-year fixed rate mortgage for primary residence",
        "credit_score": 780,
        "collateral": 300000,
    },
    {
        "name": "Auto Loan",
        "amount": 35000,
        "interest_rate": 3.2,
        "term": 60,
        "start_date": date(2023, 2, 1),
        "end_date": date(2028, 2, 1),
        "status": "active",
        "borrower_name": "Sarah Johnson",
        "borrower_email": "sarah.j@example.com",
        "description": "New vehicle financing",
        "credit_score": 750,
        "collateral": 40000,
    },
    {
        "name": "Business Expansion",
        "amount": 150000,
        "interest_rate": 6.75,
        "term": 120,
        "start_date": date(2022, 11, 1),
        "end_date": date(2032, 11, 1),
        "status": "active",
        "borrower_name": "Acme Corporation",
        "borrower_email": "finance@acmecorp.com",
        "description": "Funding for new equipment and facility expansion",
        "credit_score": 680,
        "collateral": 100000,
    },
    {
        "name": "Personal Loan",
        "amount": 15000,
        "interest_rate": 8.5,
        "term": 36,
        "start_date": date(2023, 3, 15),
        "end_date": date(2026, 3, 15),
        "status": "pending",
        "borrower_name": "Michael Chen",
        "borrower_email": "m.chen@example.com",
        "description": "Debt consolidation",
        "credit_score": 620,
        "collateral": 0,
    },
    {
        "name": "Student Loan Refinance",
        "amount": 45000,
        "interest_rate": 5.25,
        "term": 120,
        "start_date": date(2022, 9, 1),
        "end_date": date(2032, 9, 1),
        "status": "active",
        "borrower_name": "Emily Rodriguez",
        "borrower_email": "e.rodriguez@example.com",
        "description": "Consolidation of federal and private student loans",
        "credit_score": 710,
        "collateral": 0,
    },
    {
        "name": "Small Business Startup",
        "amount": 75000,
        "interest_rate": 9.5,
        "term": 84,
        "start_date": date(2023, 4, 1),
        "end_date": date(2030, 4, 1),
        "status": "active",
        "borrower_name": "Tech Innovators LLC",
        "borrower_email": "finance@techinnovators.com",
        "description": "Initial funding for tech startup",
        "credit_score": 650,
        "collateral": 25000,
    },
    {
        "name": "Home Renovation",
        "amount": 50000,
        "interest_rate": 5.75,
        "term": 60,
        "start_date": date(2023, 5, 15),
        "end_date": date(2028, 5, 15),
        "status": "active",
        "borrower_name": "David Wilson",
        "borrower_email": "d.wilson@example.com",
        "description": "Kitchen and bathroom remodeling",
        "credit_score": 760,
        "collateral": 250000,
    },
    {
        "name": "Commercial Property",
        "amount": 500000,
        "interest_rate": 5.25,
        "term": 240,
        "start_date": date(2022, 12, 1),
        "end_date": date(2042, 12, 1),
        "status": "active",
        "borrower_name": "Retail Solutions Inc",
        "borrower_email": "property@retailsolutions.com",
        "description": "Purchase of retail space in downtown area",
        "credit_score": 720,
        "collateral": 650000,
    },
]


def seed_sample_loans(db: Session, rng: Optional[random.Random] = None) -> List[Loan]:
    """Create the sample loans unless the portfolio already has loans"""
    loan_repo = LoanRepository(db)
    if loan_repo.list_loans():
        logging.info("Portfolio not empty, skipping seed")
        return []

    service = LoanService(loan_repo, PaymentRepository(db), rng)
    created = [service.create_loan(dict(fields)) for fields in SAMPLE_LOANS]
    db.commit()
    return created


def main() -> None:
    setup_logging(settings.log_level)
    init_db()

    db = SessionLocal()
    try:
        created = seed_sample_loans(db, random.Random(settings.payment_seed))
        logging.info("Seed complete", extra={"loans_created": len(created)})
    finally:
        db.close()


if __name__ == "__main__":
    main()
