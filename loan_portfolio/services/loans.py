"""Loan lifecycle service.

Keeps the derived parts of a loan in step with its terms:
- risk score/level are computed on creation and recomputed when a
  risk-affecting field changes
- the payment schedule is generated on creation and regenerated wholesale
  when amount, rate, term or start date change

The service never commits. All writes for one call share the repositories'
session, so the caller commits them together.
"""

import logging
import random
from datetime import datetime
from typing import Any, Dict, List, Optional

from loan_portfolio.domain.models import PaymentStatus, RiskAssessment, RiskInput
from loan_portfolio.domain.payments import generate_payments_for_loan
from loan_portfolio.domain.risk import assess_risk
from loan_portfolio.infrastructure.database.models import Loan, Payment
from loan_portfolio.infrastructure.database.repositories import LoanRepository, PaymentRepository

RISK_FIELDS = frozenset({"amount", "interest_rate", "term", "credit_score", "collateral"})
SCHEDULE_FIELDS = frozenset({"amount", "interest_rate", "term", "start_date"})


def assess_loan_risk(fields) -> RiskAssessment:
    """Risk assessment for a loan object or a dict of loan fields"""
    get = fields.get if isinstance(fields, dict) else lambda name: getattr(fields, name, None)
    return assess_risk(
        RiskInput(
            amount=get("amount"),
            interest_rate_percent=get("interest_rate"),
            term_months=get("term"),
            credit_score=get("credit_score"),
            collateral=get("collateral"),
        )
    )


class LoanService:
    """Creates, updates and deletes loans together with their derived data."""

    def __init__(
        self,
        loans: LoanRepository,
        payments: PaymentRepository,
        rng: Optional[random.Random] = None,
    ):
        """
        Args:
            loans: Loan repository
            payments: Payment repository sharing the same session
            rng: Randomness for the simulated payment history (default: unseeded)
        """
        self.loans = loans
        self.payments = payments
        self.rng = rng or random.Random()

    def list_loans(self, status: Optional[str] = None) -> List[Loan]:
        return self.loans.list_loans(status)

    def get_loan(self, loan_id: str) -> Loan:
        return self.loans.get_loan(loan_id)

    def create_loan(self, fields: Dict[str, Any]) -> Loan:
        """Persist a loan with its risk assessment and payment schedule"""
        risk = assess_loan_risk(fields)
        loan = self.loans.create_loan(
            {**fields, "risk_score": risk.score, "risk_level": risk.level.value}
        )
        self._regenerate_payments(loan)
        logging.info(
            "Loan created",
            extra={"loan_id": loan.id, "risk_score": risk.score, "risk_level": risk.level.value},
        )
        return loan

    def update_loan(self, loan_id: str, fields: Dict[str, Any]) -> Loan:
        """
        Apply a partial update.

        Raises:
            LoanNotFoundError: No loan with loan_id
        """
        loan = self.loans.update_loan(loan_id, fields)

        if RISK_FIELDS & fields.keys():
            risk = assess_loan_risk(loan)
            loan = self.loans.update_loan(
                loan_id, {"risk_score": risk.score, "risk_level": risk.level.value}
            )

        if SCHEDULE_FIELDS & fields.keys():
            self._regenerate_payments(loan)

        return loan

    def delete_loan(self, loan_id: str) -> Loan:
        """Delete a loan; its payments go with it"""
        return self.loans.delete_loan(loan_id)

    def get_payments(self, loan_id: str) -> List[Payment]:
        """Payments of an existing loan, ordered by payment number"""
        self.loans.get_loan(loan_id)
        return self.payments.get_payments(loan_id)

    def update_payment_status(
        self,
        payment_id: str,
        status: PaymentStatus,
        paid_date: Optional[datetime] = None,
    ) -> Payment:
        return self.payments.update_payment_status(payment_id, status, paid_date)

    def _regenerate_payments(self, loan: Loan) -> List[Payment]:
        scheduled = generate_payments_for_loan(loan, self.rng)
        logging.debug("Regenerating payments", extra={"loan_id": loan.id, "count": len(scheduled)})
        return self.payments.replace_payments(loan.id, scheduled)
