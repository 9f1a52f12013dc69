"""POST /v1/calculators/* - stateless financial calculators"""

from fastapi import APIRouter

from loan_portfolio.api.v1.schemas import (
    AffordabilityRequest,
    AffordabilityResponse,
    ComparisonRequest,
    ComparisonResponse,
    RateComparisonSchema,
    RepaymentRequest,
    RepaymentResponse,
    TermComparisonSchema,
)
from loan_portfolio.config import settings
from loan_portfolio.domain.amortization import affordability, compare_rates, compare_terms, repayment_summary
from loan_portfolio.domain.models import LoanTerms
from loan_portfolio.infrastructure.observability.metrics import calculator_counter

router = APIRouter()


@router.post("/calculators/repayment", response_model=RepaymentResponse)
def calculate_repayment(request_body: RepaymentRequest):
    """Monthly payment, total interest and full amortization schedule"""
    calculator_counter.labels(calculator="repayment").inc()
    terms = LoanTerms(
        principal=request_body.principal,
        annual_rate_percent=request_body.annual_rate_percent,
        term_months=request_body.term_months,
    )
    summary = repayment_summary(terms)
    return RepaymentResponse.model_validate(summary)


@router.post("/calculators/affordability", response_model=AffordabilityResponse)
def calculate_affordability(request_body: AffordabilityRequest):
    """How much can be borrowed given income and expenses"""
    calculator_counter.labels(calculator="affordability").inc()
    result = affordability(
        monthly_income=request_body.monthly_income,
        monthly_expenses=request_body.monthly_expenses,
        annual_rate_percent=request_body.annual_rate_percent,
        term_months=request_body.term_months,
        down_payment=request_body.down_payment,
        debt_ratio=settings.affordability_debt_ratio,
    )
    return AffordabilityResponse.model_validate(result)


@router.post("/calculators/comparison", response_model=ComparisonResponse)
def calculate_comparison(request_body: ComparisonRequest):
    """
    Compare costs across rates and terms.

    Rates are compared over the first term given, terms at the first rate
    given. Results keep the request's order.
    """
    calculator_counter.labels(calculator="comparison").inc()
    rate_results = compare_rates(request_body.principal, request_body.terms[0], request_body.rates)
    term_results = compare_terms(request_body.principal, request_body.rates[0], request_body.terms)

    return ComparisonResponse(
        rate_comparison=[RateComparisonSchema.model_validate(item) for item in rate_results],
        term_comparison=[TermComparisonSchema.model_validate(item) for item in term_results],
    )
