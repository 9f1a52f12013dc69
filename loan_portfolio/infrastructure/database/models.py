"""SQLAlchemy ORM models for loans and their payment schedules"""

import uuid
from sqlalchemy import Column, String, Float, DateTime, Date, Integer, ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


class Loan(Base):
    """Loan with its financial terms, borrower and stored risk assessment"""

    __tablename__ = "loan"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(Text, nullable=False)
    amount = Column(Float, nullable=False)
    interest_rate = Column(Float, nullable=False)
    term = Column(Integer, nullable=False)  # months
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    status = Column(String(16), nullable=False, default="pending", index=True)
    borrower_name = Column(Text, nullable=False)
    borrower_email = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    credit_score = Column(Integer, nullable=True)
    collateral = Column(Float, nullable=True)
    risk_score = Column(Integer, nullable=False)
    risk_level = Column(String(16), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    payments = relationship(
        "Payment",
        back_populates="loan",
        cascade="all, delete-orphan",
        order_by="Payment.payment_number",
    )


class Payment(Base):
    """Scheduled payment for a loan"""

    __tablename__ = "payment"
    __table_args__ = (UniqueConstraint("loan_id", "payment_number", name="uq_payment_loan_number"),)

    id = Column(String(36), primary_key=True, default=_new_id)
    loan_id = Column(String(36), ForeignKey("loan.id", ondelete="CASCADE"), nullable=False, index=True)
    payment_number = Column(Integer, nullable=False)
    due_date = Column(Date, nullable=False)
    amount = Column(Float, nullable=False)
    principal = Column(Float, nullable=False)
    interest = Column(Float, nullable=False)
    status = Column(String(16), nullable=False, default="pending")
    paid_date = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    loan = relationship("Loan", back_populates="payments")
