"""
Database models for membership billing.
"""

from enum import Enum

from sqlalchemy import (
    CheckConstraint, Column, Date, DateTime, Index, Integer, String,
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func


Base = declarative_base()


class PaymentType(str, Enum):
    """Payment type enumeration. NONE marks an invoice not yet paid."""
    NONE = ""
    STRIPE = "stripe"
    DEPOSIT = "deposit"
    CHEQUE = "cheque"
    DIRECT_DEBIT = "direct-debit"
    PAYPAL = "paypal"


class PaymentStatus(str, Enum):
    """Payment status enumeration."""
    PENDING = "Pending"
    PAID = "PAID"


class Invoice(Base):
    """Membership invoice, one per signup or renewal."""
    __tablename__ = 'invoices'

    id = Column(Integer, primary_key=True, autoincrement=True)
    member_email = Column(String(255), nullable=False, index=True)

    total_amount_in_cents = Column(Integer, nullable=False, default=0)
    payment_type = Column(String(20), nullable=False,
                          default=PaymentType.NONE.value)
    payment_status = Column(String(20), nullable=False,
                            default=PaymentStatus.PENDING.value)
    payment_date = Column(Date)

    # Assigned after creation, derived from id
    reference = Column(String(50), nullable=False, default="")
    transaction_id = Column(String(255))

    created_at = Column(DateTime(timezone=True),
                        server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(
    ), onupdate=func.now(), nullable=False)

    __table_args__ = (
        CheckConstraint('total_amount_in_cents >= 0',
                        name='check_invoice_total_positive'),
        CheckConstraint("payment_status IN ('Pending', 'PAID')",
                        name='check_valid_payment_status'),
        Index('idx_invoice_reference', 'reference'),
    )

    @property
    def is_paid(self) -> bool:
        return self.payment_status == PaymentStatus.PAID.value

    def __repr__(self) -> str:
        return f"<Invoice id={self.id} reference={self.reference!r} status={self.payment_status}>"
