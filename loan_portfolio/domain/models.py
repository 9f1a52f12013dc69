"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Dict, List


class LoanStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    PAID = "paid"
    DEFAULTED = "defaulted"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    LATE = "late"
    MISSED = "missed"


class RiskLevel(str, Enum):
    """Ordered risk category: low < medium < high < very-high"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "very-high"

    @property
    def rank(self) -> int:
        return list(RiskLevel).index(self)

    def __lt__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank >= other.rank


@dataclass
class LoanTerms:
    """Financial terms fed to the amortization engine"""

    principal: float
    annual_rate_percent: float
    term_months: int


@dataclass
class AmortizationRow:
    """Single period in an amortization schedule"""

    period_index: int
    payment_amount: float
    principal_component: float
    interest_component: float
    remaining_balance: float  # clamped at zero


@dataclass
class RateComparison:
    rate: float
    monthly_payment: float
    total_interest: float
    total_cost: float


@dataclass
class TermComparison:
    term: int
    monthly_payment: float
    total_interest: float
    total_cost: float


@dataclass
class YearlySummary:
    """Schedule rows aggregated per loan year"""

    year: int
    total_payment: float
    principal_paid: float
    interest_paid: float
    ending_balance: float


@dataclass
class RepaymentSummary:
    monthly_payment: float
    total_interest: float
    total_cost: float
    schedule: List[AmortizationRow]
    yearly: List[YearlySummary]


@dataclass
class AffordabilityPoint:
    rate: float
    total_purchase: float


@dataclass
class AffordabilityResult:
    monthly_payment: float
    affordable_amount: float
    total_purchase: float
    dti: float
    dti_rating: str  # good | acceptable | high
    rate_sensitivity: List[AffordabilityPoint]


@dataclass
class RiskInput:
    """Loan attributes consumed by the risk heuristic"""

    amount: float
    interest_rate_percent: float
    term_months: int
    credit_score: int | None = None
    collateral: float | None = None


@dataclass
class RiskAssessment:
    score: int
    level: RiskLevel


@dataclass
class ScheduledPayment:
    """Payment row produced for a loan before it is persisted"""

    payment_number: int
    due_date: date
    amount: float
    principal: float
    interest: float
    status: PaymentStatus = PaymentStatus.PENDING
    paid_date: datetime | None = None


@dataclass
class MonthlyPaymentForecast:
    month: str  # e.g. "Oct 2026"
    expected: float
    received: float


@dataclass
class PortfolioAnalytics:
    """Aggregated view over all loans and payments"""

    total_loans: int
    total_amount: float
    average_interest_rate: float
    status_distribution: Dict[str, int]
    risk_distribution: Dict[str, int]
    amount_by_risk: Dict[str, float]
    monthly_payments: List[MonthlyPaymentForecast] = field(default_factory=list)
    payment_status_distribution: Dict[str, int] = field(default_factory=dict)
