"""Pydantic schemas for API request/response validation"""

from datetime import date, datetime
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from loan_portfolio.domain.models import LoanStatus, PaymentStatus, RiskLevel

# 100 years
MAX_TERM_MONTHS = 1200
MAX_AMOUNT = 1_000_000_000_000


class LoanCreate(BaseModel):
    """Request body for POST /v1/loans"""

    model_config = ConfigDict(use_enum_values=True, allow_inf_nan=False)

    name: str = Field(..., min_length=1, description="Loan name")
    amount: float = Field(..., gt=0, le=MAX_AMOUNT, description="Principal amount")
    interest_rate: float = Field(..., ge=0, le=100, description="Annual interest rate in percent")
    term: int = Field(..., gt=0, le=MAX_TERM_MONTHS, description="Term in months")
    start_date: date
    end_date: date
    status: LoanStatus = LoanStatus.PENDING
    borrower_name: str = Field(..., min_length=1)
    borrower_email: EmailStr
    description: Optional[str] = None
    credit_score: Optional[int] = Field(None, ge=300, le=850)
    collateral: Optional[float] = Field(None, ge=0)


class LoanUpdate(BaseModel):
    """Request body for PATCH /v1/loans/{loan_id}; only sent fields change"""

    model_config = ConfigDict(use_enum_values=True, allow_inf_nan=False)

    name: Optional[str] = Field(None, min_length=1)
    amount: Optional[float] = Field(None, gt=0, le=MAX_AMOUNT)
    interest_rate: Optional[float] = Field(None, ge=0, le=100)
    term: Optional[int] = Field(None, gt=0, le=MAX_TERM_MONTHS)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: Optional[LoanStatus] = None
    borrower_name: Optional[str] = Field(None, min_length=1)
    borrower_email: Optional[EmailStr] = None
    description: Optional[str] = None
    credit_score: Optional[int] = Field(None, ge=300, le=850)
    collateral: Optional[float] = Field(None, ge=0)


class LoanResponse(BaseModel):
    """Loan as returned by the API"""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    amount: float
    interest_rate: float
    term: int
    start_date: date
    end_date: date
    status: LoanStatus
    borrower_name: str
    borrower_email: EmailStr
    description: Optional[str] = None
    credit_score: Optional[int] = None
    collateral: Optional[float] = None
    risk_score: int
    risk_level: RiskLevel
    created_at: datetime
    updated_at: datetime


class LoanListResponse(BaseModel):
    loans: List[LoanResponse]


class PaymentResponse(BaseModel):
    """Single payment in a loan's schedule"""

    model_config = ConfigDict(from_attributes=True)

    id: str
    loan_id: str
    payment_number: int
    due_date: date
    amount: float
    principal: float
    interest: float
    status: PaymentStatus
    paid_date: Optional[datetime] = None


class PaymentListResponse(BaseModel):
    loan_id: str
    payments: List[PaymentResponse]


class PaymentStatusUpdate(BaseModel):
    """Request body for PATCH /v1/payments/{payment_id}"""

    status: PaymentStatus
    paid_date: Optional[datetime] = None


class MonthlyPaymentSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    month: str
    expected: float
    received: float


class AnalyticsResponse(BaseModel):
    """Response for GET /v1/analytics"""

    model_config = ConfigDict(from_attributes=True)

    total_loans: int
    total_amount: float
    average_interest_rate: float
    status_distribution: Dict[str, int]
    risk_distribution: Dict[str, int]
    amount_by_risk: Dict[str, float]
    monthly_payments: List[MonthlyPaymentSchema]
    payment_status_distribution: Dict[str, int]


# Calculators


class RepaymentRequest(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    principal: float = Field(..., ge=0, le=MAX_AMOUNT)
    annual_rate_percent: float = Field(..., ge=0, le=100)
    term_months: int = Field(..., ge=0, le=MAX_TERM_MONTHS)


class AmortizationRowSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    period_index: int
    payment_amount: float
    principal_component: float
    interest_component: float
    remaining_balance: float


class YearlySummarySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    year: int
    total_payment: float
    principal_paid: float
    interest_paid: float
    ending_balance: float


class RepaymentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    monthly_payment: float
    total_interest: float
    total_cost: float
    schedule: List[AmortizationRowSchema]
    yearly: List[YearlySummarySchema]


class AffordabilityRequest(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    monthly_income: float = Field(..., ge=0)
    monthly_expenses: float = Field(0, ge=0)
    annual_rate_percent: float = Field(..., ge=0, le=100)
    term_months: int = Field(..., gt=0, le=MAX_TERM_MONTHS)
    down_payment: float = Field(0, ge=0)


class AffordabilityPointSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    rate: float
    total_purchase: float


class AffordabilityResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    monthly_payment: float
    affordable_amount: float
    total_purchase: float
    dti: float
    dti_rating: str
    rate_sensitivity: List[AffordabilityPointSchema]


class ComparisonRequest(BaseModel):
    """Rates are compared at the first term, terms at the first rate"""

    model_config = ConfigDict(allow_inf_nan=False)

    principal: float = Field(..., gt=0, le=MAX_AMOUNT)
    rates: List[float] = Field(..., min_length=1)
    terms: List[int] = Field(..., min_length=1)

    @field_validator("rates")
    @classmethod
    def rates_in_range(cls, rates: List[float]) -> List[float]:
        if any(rate < 0 or rate > 100 for rate in rates):
            raise ValueError("Rates must be between 0 and 100")
        return rates

    @field_validator("terms")
    @classmethod
    def terms_in_range(cls, terms: List[int]) -> List[int]:
        if any(term <= 0 or term > MAX_TERM_MONTHS for term in terms):
            raise ValueError(f"Terms must be between 1 and {MAX_TERM_MONTHS} months")
        return terms


class RateComparisonSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    rate: float
    monthly_payment: float
    total_interest: float
    total_cost: float


class TermComparisonSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    term: int
    monthly_payment: float
    total_interest: float
    total_cost: float


class ComparisonResponse(BaseModel):
    rate_comparison: List[RateComparisonSchema]
    term_comparison: List[TermComparisonSchema]
