"""Payment schedule generation for loans"""

import random
from typing import List, Optional

from loan_portfolio.domain.amortization import generate_schedule
from loan_portfolio.domain.models import LoanStatus, PaymentStatus, ScheduledPayment
from loan_portfolio.utils.date_utils import add_months, at_midnight_utc
from loan_portfolio.utils.money import round_currency


def _simulated_status(
    loan_status: str,
    payment_number: int,
    rng: random.Random,
) -> tuple[PaymentStatus, Optional[int]]:
    """
    Pick a status and a paid-date offset (days relative to due date).

    Active loans:    1-5 paid early, 6 late, rest pending
    Defaulted loans: 1-3 paid early, 4-5 late, 6-7 missed, rest pending
    """
    if loan_status == LoanStatus.ACTIVE:
        if payment_number <= 5:
            return PaymentStatus.PAID, -rng.randint(0, 4)
        if payment_number == 6:
            return PaymentStatus.LATE, rng.randint(1, 10)
    elif loan_status == LoanStatus.DEFAULTED:
        if payment_number <= 3:
            return PaymentStatus.PAID, -rng.randint(0, 4)
        if payment_number <= 5:
            return PaymentStatus.LATE, rng.randint(5, 19)
        if payment_number <= 7:
            return PaymentStatus.MISSED, None

    return PaymentStatus.PENDING, None


def generate_payments_for_loan(loan, rng: Optional[random.Random] = None) -> List[ScheduledPayment]:
    """
    Generate one payment per amortization period for a loan.

    Args:
        loan: Any object exposing amount, interest_rate, term, start_date, status
        rng: Source for the simulated paid-date offsets (default: unseeded)

    Returns:
        Payments numbered from 1, due monthly from start_date, with amount,
        principal and interest rounded to cents

    The statuses are a simulated payment history keyed off the loan status,
    not a ledger. Callers replace the whole set when the loan's amount, rate,
    term or start date change.
    """
    if rng is None:
        rng = random.Random()

    schedule = generate_schedule(loan.amount, loan.interest_rate, loan.term)

    payments = []
    for row in schedule:
        due_date = add_months(loan.start_date, row.period_index - 1)
        status, offset_days = _simulated_status(loan.status, row.period_index, rng)

        payments.append(
            ScheduledPayment(
                payment_number=row.period_index,
                due_date=due_date,
                amount=round_currency(row.payment_amount),
                principal=round_currency(row.principal_component),
                interest=round_currency(row.interest_component),
                status=status,
                paid_date=at_midnight_utc(due_date, offset_days) if offset_days is not None else None,
            )
        )

    return payments
