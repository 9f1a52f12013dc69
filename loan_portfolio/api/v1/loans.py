"""/v1/loans - loan CRUD with derived risk and payment schedule"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from sqlalchemy.orm import Session

from loan_portfolio.api.v1.schemas import (
    LoanCreate,
    LoanListResponse,
    LoanResponse,
    LoanUpdate,
    PaymentListResponse,
    PaymentResponse,
)
from loan_portfolio.api.dependencies import get_loan_service, get_request_id
from loan_portfolio.domain.exceptions import LoanNotFoundError
from loan_portfolio.domain.models import LoanStatus
from loan_portfolio.infrastructure.database.session import get_db
from loan_portfolio.infrastructure.observability.logging import log_loan_event
from loan_portfolio.infrastructure.observability.metrics import record_loan_created, record_loan_updated
from loan_portfolio.services.loans import LoanService, SCHEDULE_FIELDS

router = APIRouter()

# Optional loan fields a PATCH may reset to null
CLEARABLE_FIELDS = frozenset({"description", "credit_score", "collateral"})


@router.get("/loans", response_model=LoanListResponse)
def list_loans(
    status: Optional[LoanStatus] = Query(None, description="Only loans with this status"),
    service: LoanService = Depends(get_loan_service),
):
    """List loans in the portfolio, newest first"""
    loans = service.list_loans(status.value if status else None)
    return LoanListResponse(loans=[LoanResponse.model_validate(loan) for loan in loans])


@router.post("/loans", response_model=LoanResponse, status_code=201)
def create_loan(
    request_body: LoanCreate,
    request: Request,
    db: Session = Depends(get_db),
    service: LoanService = Depends(get_loan_service),
):
    """
    Create a loan.

    Flow:
    1. Score risk from credit score, LTV, rate and term
    2. Persist loan with its risk assessment
    3. Generate the payment schedule
    4. Commit everything in one transaction
    """
    request_id = get_request_id(request)

    try:
        loan = service.create_loan(request_body.model_dump())
        db.commit()
    except Exception as e:
        db.rollback()
        logging.error(f"Failed to create loan: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Failed to create loan")

    record_loan_created(loan.risk_level, loan.risk_score, len(loan.payments))
    log_loan_event(request_id, loan.id, "created", risk_score=loan.risk_score, risk_level=loan.risk_level)

    return LoanResponse.model_validate(loan)


@router.get("/loans/{loan_id}", response_model=LoanResponse)
def get_loan(loan_id: str, service: LoanService = Depends(get_loan_service)):
    """Retrieve a single loan"""
    try:
        loan = service.get_loan(loan_id)
    except LoanNotFoundError:
        raise HTTPException(status_code=404, detail="Loan not found")

    return LoanResponse.model_validate(loan)


@router.patch("/loans/{loan_id}", response_model=LoanResponse)
def update_loan(
    loan_id: str,
    request_body: LoanUpdate,
    request: Request,
    db: Session = Depends(get_db),
    service: LoanService = Depends(get_loan_service),
):
    """
    Partially update a loan.

    Risk is re-scored when amount, rate, term, credit score or collateral
    change; the payment schedule is rebuilt when amount, rate, term or start
    date change.
    """
    request_id = get_request_id(request)
    fields = {
        name: value
        for name, value in request_body.model_dump(exclude_unset=True).items()
        if value is not None or name in CLEARABLE_FIELDS
    }

    try:
        loan = service.update_loan(loan_id, fields)
        db.commit()
    except LoanNotFoundError:
        db.rollback()
        raise HTTPException(status_code=404, detail="Loan not found")
    except Exception as e:
        db.rollback()
        logging.error(f"Failed to update loan: {e}", extra={"request_id": request_id, "loan_id": loan_id})
        raise HTTPException(status_code=500, detail="Failed to update loan")

    regenerated = bool(SCHEDULE_FIELDS & fields.keys())
    record_loan_updated(loan.risk_score, len(loan.payments) if regenerated else None)
    log_loan_event(request_id, loan.id, "updated", fields=sorted(fields), payments_regenerated=regenerated)

    return LoanResponse.model_validate(loan)


@router.delete("/loans/{loan_id}", status_code=204)
def delete_loan(
    loan_id: str,
    request: Request,
    db: Session = Depends(get_db),
    service: LoanService = Depends(get_loan_service),
):
    """Delete a loan and its payments"""
    request_id = get_request_id(request)

    try:
        service.delete_loan(loan_id)
        db.commit()
    except LoanNotFoundError:
        db.rollback()
        raise HTTPException(status_code=404, detail="Loan not found")

    log_loan_event(request_id, loan_id, "deleted")
    return Response(status_code=204)


@router.get("/loans/{loan_id}/payments", response_model=PaymentListResponse)
def get_loan_payments(loan_id: str, service: LoanService = Depends(get_loan_service)):
    """Retrieve a loan's payment schedule ordered by payment number"""
    try:
        payments = service.get_payments(loan_id)
    except LoanNotFoundError:
        raise HTTPException(status_code=404, detail="Loan not found")

    return PaymentListResponse(
        loan_id=loan_id,
        payments=[PaymentResponse.model_validate(payment) for payment in payments],
    )
