"""Amortization engine - payment, interest, affordability and schedule math

All functions are pure. Invalid inputs (non-positive principal, term or payment,
NaN or infinite values) fall back to 0 or an empty schedule instead of raising,
so half-filled calculator forms never error out.
"""

import math
from typing import List, Sequence, Tuple

from loan_portfolio.domain.models import (
    AffordabilityPoint,
    AffordabilityResult,
    AmortizationRow,
    LoanTerms,
    RateComparison,
    RepaymentSummary,
    TermComparison,
    YearlySummary,
)

# DTI bands used by lenders for the affordability check
DTI_GOOD_MAX = 36.0
DTI_ACCEPTABLE_MAX = 43.0


def _finite(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)


def _monthly_rate(annual_rate_percent: float) -> float:
    return annual_rate_percent / 100 / 12


def _annuity_factors(rate: float, term_months: int) -> Tuple[float, float]:
    """
    (1+r)^n and (1+r)^n - 1.

    The second is computed directly with expm1/log1p, so it stays non-zero for
    rates too small to register in 1 + r. Raises OverflowError when (1+r)^n
    is out of float range.
    """
    growth_less_one = math.expm1(term_months * math.log1p(rate))
    return growth_less_one + 1, growth_less_one


def monthly_payment(principal: float, annual_rate_percent: float, term_months: int) -> float:
    """
    Fixed-rate annuity payment.

    payment = P * r * (1+r)^n / ((1+r)^n - 1), with r = annual% / 100 / 12

    A zero (or negative) rate degrades to straight-line repayment P / n. Terms
    so long that (1+r)^n overflows are treated as invalid and yield 0.
    """
    if not _finite(principal, annual_rate_percent, term_months):
        return 0.0
    if principal <= 0 or term_months <= 0:
        return 0.0
    if annual_rate_percent <= 0:
        return principal / term_months

    rate = _monthly_rate(annual_rate_percent)
    try:
        growth, growth_less_one = _annuity_factors(rate, term_months)
    except OverflowError:
        return 0.0
    if growth_less_one <= 0:
        return principal / term_months

    payment = principal * rate * (growth / growth_less_one)
    return payment if math.isfinite(payment) else 0.0


def total_interest(principal: float, monthly_payment: float, term_months: int) -> float:
    """Interest paid over the life of the loan; can dip a hair below 0 on zero-rate loans"""
    return monthly_payment * term_months - principal


def affordable_loan_amount(monthly_payment: float, annual_rate_percent: float, term_months: int) -> float:
    """Largest principal a given monthly payment retires (inverse of monthly_payment)"""
    if not _finite(monthly_payment, annual_rate_percent, term_months):
        return 0.0
    if monthly_payment <= 0 or term_months <= 0:
        return 0.0
    if annual_rate_percent <= 0:
        return monthly_payment * term_months

    rate = _monthly_rate(annual_rate_percent)
    try:
        growth, growth_less_one = _annuity_factors(rate, term_months)
    except OverflowError:
        return 0.0
    if growth_less_one <= 0:
        return monthly_payment * term_months

    amount = monthly_payment * (growth_less_one / growth) / rate
    return amount if math.isfinite(amount) else 0.0


def debt_to_income(monthly_debt: float, monthly_income: float) -> float:
    """Debt-to-income ratio as a percentage"""
    if not _finite(monthly_debt, monthly_income) or monthly_income <= 0:
        return 0.0
    return monthly_debt / monthly_income * 100


def generate_schedule(principal: float, annual_rate_percent: float, term_months: int) -> List[AmortizationRow]:
    """
    Build the period-by-period amortization schedule.

    Each period charges interest on the running balance and applies the rest of
    the fixed payment to principal. The emitted balance is clamped at zero and
    iteration stops as soon as the debt is retired, so the schedule never has
    more than term_months rows and may have fewer.
    """
    if not _finite(principal, annual_rate_percent, term_months):
        return []
    if principal <= 0 or term_months <= 0:
        return []

    rate = _monthly_rate(max(annual_rate_percent, 0.0))
    payment = monthly_payment(principal, annual_rate_percent, term_months)
    if payment <= 0:
        return []

    balance = principal
    schedule = []
    for period in range(1, int(term_months) + 1):
        interest = balance * rate
        principal_paid = payment - interest
        balance -= principal_paid

        schedule.append(
            AmortizationRow(
                period_index=period,
                payment_amount=payment,
                principal_component=principal_paid,
                interest_component=interest,
                remaining_balance=max(0.0, balance),
            )
        )

        if balance <= 0:
            break

    return schedule


def compare_rates(principal: float, term_months: int, rates: Sequence[float]) -> List[RateComparison]:
    """Cost of the same loan at each rate, in input order"""
    results = []
    for rate in rates:
        payment = monthly_payment(principal, rate, term_months)
        interest = total_interest(principal, payment, term_months)
        results.append(
            RateComparison(
                rate=rate,
                monthly_payment=payment,
                total_interest=interest,
                total_cost=principal + interest,
            )
        )
    return results


def compare_terms(principal: float, annual_rate_percent: float, terms: Sequence[int]) -> List[TermComparison]:
    """Cost of the same loan over each term, in input order"""
    results = []
    for term in terms:
        payment = monthly_payment(principal, annual_rate_percent, term)
        interest = total_interest(principal, payment, term)
        results.append(
            TermComparison(
                term=term,
                monthly_payment=payment,
                total_interest=interest,
                total_cost=principal + interest,
            )
        )
    return results


def summarize_by_year(schedule: Sequence[AmortizationRow]) -> List[YearlySummary]:
    """Group schedule rows into loan years (periods 1-12 are year 1, ...)"""
    years: List[YearlySummary] = []
    for row in schedule:
        year = math.ceil(row.period_index / 12)
        if not years or years[-1].year != year:
            years.append(YearlySummary(year, 0.0, 0.0, 0.0, 0.0))
        summary = years[-1]
        summary.total_payment += row.payment_amount
        summary.principal_paid += row.principal_component
        summary.interest_paid += row.interest_component
        summary.ending_balance = row.remaining_balance
    return years


def repayment_summary(terms: LoanTerms) -> RepaymentSummary:
    """Everything the repayment calculator shows for one loan"""
    principal = terms.principal
    payment = monthly_payment(principal, terms.annual_rate_percent, terms.term_months)
    interest = total_interest(principal, payment, terms.term_months) if payment > 0 else 0.0
    schedule = generate_schedule(principal, terms.annual_rate_percent, terms.term_months)

    return RepaymentSummary(
        monthly_payment=payment,
        total_interest=interest,
        total_cost=principal + interest if payment > 0 else 0.0,
        schedule=schedule,
        yearly=summarize_by_year(schedule),
    )


def rate_dti(dti: float) -> str:
    if dti <= DTI_GOOD_MAX:
        return "good"
    if dti <= DTI_ACCEPTABLE_MAX:
        return "acceptable"
    return "high"


def affordability(
    monthly_income: float,
    monthly_expenses: float,
    annual_rate_percent: float,
    term_months: int,
    down_payment: float = 0.0,
    debt_ratio: float = 0.36,
) -> AffordabilityResult:
    """
    Estimate how much can be borrowed from income and expenses.

    The budget for the loan payment is debt_ratio of disposable income
    (income - expenses). The sensitivity table repeats the estimate for rates
    two points below to two points above the requested one, skipping rates <= 0.
    """
    payment = (monthly_income - monthly_expenses) * debt_ratio
    amount = affordable_loan_amount(payment, annual_rate_percent, term_months)
    dti = debt_to_income(payment, monthly_income)

    sensitivity = [
        AffordabilityPoint(
            rate=rate,
            total_purchase=affordable_loan_amount(payment, rate, term_months) + down_payment,
        )
        for rate in (annual_rate_percent + step for step in range(-2, 3))
        if rate > 0
    ]

    return AffordabilityResult(
        monthly_payment=payment,
        affordable_amount=amount,
        total_purchase=amount + down_payment,
        dti=dti,
        dti_rating=rate_dti(dti),
        rate_sensitivity=sensitivity,
    )
