"""Data access layer for loans and payments

Repositories flush but never commit: the caller owns the transaction, so a loan
update and the payments regenerated from it land together or not at all.
"""

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional
from sqlalchemy.orm import Session
from loan_portfolio.infrastructure.database.models import Loan, Payment
from loan_portfolio.domain.exceptions import LoanNotFoundError, PaymentNotFoundError
from loan_portfolio.domain.models import PaymentStatus, ScheduledPayment
from loan_portfolio.utils.date_utils import utcnow

# Statuses that carry a paid date
_SETTLED_STATUSES = {PaymentStatus.PAID.value, PaymentStatus.LATE.value}


class LoanRepository:
    """Repository for loans"""

    def __init__(self, db: Session):
        self.db = db

    def list_loans(self, status: Optional[str] = None) -> List[Loan]:
        """Fetch loans, newest first, optionally filtered by status"""
        query = self.db.query(Loan)
        if status is not None:
            query = query.filter(Loan.status == status)
        return query.order_by(Loan.created_at.desc(), Loan.name).all()

    def get_loan(self, loan_id: str) -> Loan:
        """Fetch a loan or raise LoanNotFoundError"""
        loan = self.db.get(Loan, loan_id)
        if loan is None:
            raise LoanNotFoundError(loan_id)
        return loan

    def create_loan(self, fields: Dict[str, Any]) -> Loan:
        """Persist a new loan"""
        db_loan = Loan(**fields)
        self.db.add(db_loan)
        self.db.flush()  # Get ID without committing
        return db_loan

    def update_loan(self, loan_id: str, fields: Dict[str, Any]) -> Loan:
        """Apply a partial update to a loan"""
        db_loan = self.get_loan(loan_id)
        for name, value in fields.items():
            setattr(db_loan, name, value)
        self.db.flush()
        return db_loan

    def delete_loan(self, loan_id: str) -> Loan:
        """Delete a loan together with its payments"""
        db_loan = self.get_loan(loan_id)
        self.db.delete(db_loan)
        self.db.flush()
        return db_loan


class PaymentRepository:
    """Repository for loan payments"""

    def __init__(self, db: Session):
        self.db = db

    def get_payments(self, loan_id: str) -> List[Payment]:
        """Fetch a loan's payments in payment-number order"""
        return (
            self.db.query(Payment)
            .filter(Payment.loan_id == loan_id)
            .order_by(Payment.payment_number)
            .all()
        )

    def list_payments(self) -> List[Payment]:
        return self.db.query(Payment).all()

    def replace_payments(self, loan_id: str, scheduled: Iterable[ScheduledPayment]) -> List[Payment]:
        """Discard a loan's payments and insert a freshly generated set"""
        self.db.query(Payment).filter(Payment.loan_id == loan_id).delete()
        # Old rows must be gone before the new ones reuse their payment numbers
        self.db.flush()

        db_payments = [
            Payment(
                loan_id=loan_id,
                payment_number=item.payment_number,
                due_date=item.due_date,
                amount=item.amount,
                principal=item.principal,
                interest=item.interest,
                status=item.status.value,
                paid_date=item.paid_date,
            )
            for item in scheduled
        ]
        self.db.add_all(db_payments)
        self.db.flush()

        # Reload the relationship on the owning loan if it is already in the session
        loan = self.db.get(Loan, loan_id)
        if loan is not None:
            self.db.expire(loan, ["payments"])

        return db_payments

    def update_payment_status(
        self,
        payment_id: str,
        status: PaymentStatus,
        paid_date: Optional[datetime] = None,
    ) -> Payment:
        """
        Change a payment's status.

        Paid and late payments keep the given paid date (default: now); any
        other status clears it.
        """
        db_payment = self.db.get(Payment, payment_id)
        if db_payment is None:
            raise PaymentNotFoundError(payment_id)

        status = PaymentStatus(status)
        db_payment.status = status.value
        db_payment.paid_date = (paid_date or utcnow()) if status.value in _SETTLED_STATUSES else None
        self.db.flush()
        return db_payment
