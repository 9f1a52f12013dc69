"""GET /v1/analytics - portfolio dashboard figures"""

from datetime import date
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from loan_portfolio.api.v1.schemas import AnalyticsResponse
from loan_portfolio.domain.analytics import portfolio_analytics
from loan_portfolio.infrastructure.database.session import get_db
from loan_portfolio.infrastructure.database.repositories import LoanRepository, PaymentRepository

router = APIRouter()


@router.get("/analytics", response_model=AnalyticsResponse)
def get_analytics(db: Session = Depends(get_db)):
    """
    Aggregate the whole portfolio.

    Returns:
        Loan counts and amounts by status and risk level, average rate,
        payment status counts and a 12-month expected/received forecast
    """
    loans = LoanRepository(db).list_loans()
    payments = PaymentRepository(db).list_payments()

    analytics = portfolio_analytics(loans, payments, today=date.today())
    return AnalyticsResponse.model_validate(analytics)
