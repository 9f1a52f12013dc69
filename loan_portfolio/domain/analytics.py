"""Portfolio analytics - aggregates over loans and their payments"""

from datetime import date
from typing import Iterable, List

from loan_portfolio.domain.models import (
    LoanStatus,
    MonthlyPaymentForecast,
    PaymentStatus,
    PortfolioAnalytics,
    RiskLevel,
)
from loan_portfolio.utils.date_utils import add_months, month_bounds

FORECAST_MONTHS = 12

# Payments that brought money in, on time or not
_RECEIVED_STATUSES = {PaymentStatus.PAID.value, PaymentStatus.LATE.value}


def _status_value(value) -> str:
    return value.value if hasattr(value, "value") else str(value)


def monthly_payment_forecast(payments: Iterable, today: date, months: int = FORECAST_MONTHS) -> List[MonthlyPaymentForecast]:
    """Expected vs received payment totals per calendar month, starting with today's month"""
    payments = list(payments)
    forecast = []
    for offset in range(months):
        first, last = month_bounds(add_months(today.replace(day=1), offset))
        in_month = [p for p in payments if first <= p.due_date <= last]

        forecast.append(
            MonthlyPaymentForecast(
                month=first.strftime("%b %Y"),
                expected=sum(p.amount for p in in_month),
                received=sum(p.amount for p in in_month if _status_value(p.status) in _RECEIVED_STATUSES),
            )
        )
    return forecast


def portfolio_analytics(loans: Iterable, payments: Iterable, today: date | None = None) -> PortfolioAnalytics:
    """
    Build the dashboard view of the portfolio.

    Every loan status, risk level and payment status appears in its
    distribution, with zero counts where nothing matches.
    """
    loans = list(loans)
    payments = list(payments)
    today = today or date.today()

    status_distribution = {status.value: 0 for status in LoanStatus}
    risk_distribution = {level.value: 0 for level in RiskLevel}
    amount_by_risk = {level.value: 0.0 for level in RiskLevel}
    for loan in loans:
        status_distribution[_status_value(loan.status)] += 1
        level = _status_value(loan.risk_level)
        risk_distribution[level] += 1
        amount_by_risk[level] += loan.amount

    payment_status_distribution = {status.value: 0 for status in PaymentStatus}
    for payment in payments:
        payment_status_distribution[_status_value(payment.status)] += 1

    total_amount = sum(loan.amount for loan in loans)
    average_rate = sum(loan.interest_rate for loan in loans) / len(loans) if loans else 0.0

    return PortfolioAnalytics(
        total_loans=len(loans),
        total_amount=total_amount,
        average_interest_rate=average_rate,
        status_distribution=status_distribution,
        risk_distribution=risk_distribution,
        amount_by_risk=amount_by_risk,
        monthly_payments=monthly_payment_forecast(payments, today),
        payment_status_distribution=payment_status_distribution,
    )
