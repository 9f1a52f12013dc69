"""PATCH /v1/payments/{payment_id} - record a payment's status"""

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from loan_portfolio.api.v1.schemas import PaymentResponse, PaymentStatusUpdate
from loan_portfolio.api.dependencies import get_loan_service, get_request_id
from loan_portfolio.domain.exceptions import PaymentNotFoundError
from loan_portfolio.infrastructure.database.session import get_db
from loan_portfolio.infrastructure.observability.logging import log_loan_event
from loan_portfolio.infrastructure.observability.metrics import payment_status_counter
from loan_portfolio.services.loans import LoanService

router = APIRouter()


@router.patch("/payments/{payment_id}", response_model=PaymentResponse)
def update_payment_status(
    payment_id: str,
    request_body: PaymentStatusUpdate,
    request: Request,
    db: Session = Depends(get_db),
    service: LoanService = Depends(get_loan_service),
):
    """
    Set a payment's status.

    Paid and late payments get paid_date (now when omitted); pending and
    missed payments have it cleared.
    """
    try:
        payment = service.update_payment_status(payment_id, request_body.status, request_body.paid_date)
        db.commit()
    except PaymentNotFoundError:
        db.rollback()
        raise HTTPException(status_code=404, detail="Payment not found")

    payment_status_counter.labels(status=payment.status).inc()
    log_loan_event(
        get_request_id(request),
        payment.loan_id,
        "payment_updated",
        payment_id=payment.id,
        status=payment.status,
    )

    return PaymentResponse.model_validate(payment)
