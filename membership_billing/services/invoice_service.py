"""Invoice domain service layer.

Orchestrates the invoice store, the Stripe gateway and the event log:

 - ``create_empty_invoice``: placeholder invoice for a new signup, stamped with
   a reference derived from its id.
 - ``pay_for_invoice``: charge the card (stripe) or record an offline payment.
 - ``paypal_charge_success``: reconcile a PayPal notification with its invoice.

Collaborators are looked up as module attributes at call time so tests can
substitute them.
"""
from __future__ import annotations

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Mapping, Optional, Union
import logging

from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError, model_validator
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.database import Invoice, PaymentStatus, PaymentType
from ..utils.errors import ChargeFailed, InvoiceNotFound, PaypalUpdateFailed, ValidationError
from . import event_logger, invoice_store, stripe_handler

logger = logging.getLogger(__name__)


# ----------------------------- Input Shapes ---------------------------------- #


class InvoicePayment(BaseModel):
    """Payment applied to an existing invoice. ``total_amount`` is in dollars."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    invoice_id: int = Field(alias="invoiceId")
    total_amount: Decimal = Field(ge=0, alias="totalAmount")
    payment_type: PaymentType = Field(alias="paymentType")
    stripe_token: Optional[str] = Field(default=None, alias="stripeToken")

    @model_validator(mode="after")
    def check_payment_type(self):
        if self.payment_type is PaymentType.NONE:
            raise ValueError("payment_type is required")
        if self.payment_type is PaymentType.STRIPE and not self.stripe_token:
            raise ValueError("stripe_token is required for stripe payments")
        return self

    @property
    def amount_in_cents(self) -> int:
        return _to_cents(self.total_amount)


class NewInvoice(BaseModel):
    """Invoice created in one step with its amount and payment type known (e.g. a renewal).

    The row always starts Pending; only a charge or a PayPal notification marks it PAID.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    member_email: str = Field(min_length=1, alias="memberEmail")
    membership_type: str = Field(min_length=1, alias="membershipType")
    total_amount: Decimal = Field(default=Decimal("0"), ge=0, alias="totalAmount")
    payment_type: PaymentType = Field(default=PaymentType.NONE, alias="paymentType")


def _to_cents(amount: Decimal) -> int:
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _today() -> date:
    return date.today()


def build_reference(membership_type: str, invoice_id: int) -> str:
    """Reference printed on the invoice, e.g. ("full", 1) -> "FUL1"."""
    return f"{membership_type.strip()[:3].upper()}{invoice_id}"


def _parse(model: type[BaseModel], payload: Union[BaseModel, Mapping[str, Any]]):
    if isinstance(payload, model):
        return payload
    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError(f"Invalid {model.__name__} payload",
                              details=exc.errors(include_url=False)) from exc


# ----------------------------- Internal Steps -------------------------------- #


async def _update(db: AsyncSession, values: Dict[str, Any], invoice_id: int) -> None:
    affected = await invoice_store.update_invoice(db, values, invoice_id)
    if not affected:
        raise InvoiceNotFound(invoice_id)
    event_logger.log_update_invoice_event(invoice_id, values)


async def _refreshed(db: AsyncSession, invoice_id: int) -> Invoice:
    invoice = await invoice_store.get_invoice(db, invoice_id)
    if invoice is None:
        raise InvoiceNotFound(invoice_id)
    return invoice


async def _assign_reference(db: AsyncSession, invoice_id: int, membership_type: str) -> Invoice:
    # A failure here leaves the created invoice without a reference; nothing undoes the create.
    await _update(db, {"reference": build_reference(membership_type, invoice_id)}, invoice_id)
    return await _refreshed(db, invoice_id)


def _payment_values(payment: InvoicePayment, status: PaymentStatus) -> Dict[str, Any]:
    return {
        "total_amount_in_cents": payment.amount_in_cents,
        "payment_date": _today(),
        "payment_type": payment.payment_type.value,
        "payment_status": status.value,
    }


# ----------------------------- Entry Points ---------------------------------- #


async def create_empty_invoice(db: AsyncSession, member_email: str, membership_type: str) -> Invoice:
    """Create a zero-amount invoice for a new member and stamp its reference."""
    if not member_email or not member_email.strip():
        raise ValidationError("member_email is required")
    if not membership_type or not membership_type.strip():
        raise ValidationError("membership_type is required")

    empty_invoice = {
        "member_email": member_email,
        "total_amount_in_cents": 0,
        "payment_date": _today(),
        "payment_type": PaymentType.NONE.value,
        "reference": "",
    }
    try:
        created = await invoice_store.create_invoice(db, empty_invoice)
    except Exception as exc:
        event_logger.log_create_empty_invoice_event(member_email, error=exc)
        raise
    event_logger.log_create_empty_invoice_event(member_email, invoice=created)

    return await _assign_reference(db, created.id, membership_type)


async def create_invoice(db: AsyncSession, new_invoice: Union[NewInvoice, Mapping[str, Any]]) -> Invoice:
    """Create an invoice with its payment fields already known."""
    data = _parse(NewInvoice, new_invoice)
    attributes = {
        "member_email": data.member_email,
        "total_amount_in_cents": _to_cents(data.total_amount),
        "payment_date": _today(),
        "payment_type": data.payment_type.value,
        "payment_status": PaymentStatus.PENDING.value,
        "reference": "",
    }
    created = await invoice_store.create_invoice(db, attributes)
    event_logger.log_new_invoice_event(created)

    return await _assign_reference(db, created.id, data.membership_type)


async def pay_for_invoice(db: AsyncSession, invoice: Union[InvoicePayment, Mapping[str, Any]]) -> Invoice:
    """Apply a payment to an existing invoice.

    Card payments are charged first; the invoice is only marked PAID once the
    gateway accepts the charge. Offline payment types are recorded as Pending.
    """
    payment = _parse(InvoicePayment, invoice)

    if payment.payment_type is PaymentType.STRIPE:
        try:
            charge = await stripe_handler.charge_card(payment.stripe_token, payment.amount_in_cents)
        except ChargeFailed as exc:
            event_logger.log_new_failed_charge(payment.stripe_token, exc)
            raise
        event_logger.log_new_charge_event(payment.stripe_token)
        values = _payment_values(payment, PaymentStatus.PAID)
        values["transaction_id"] = charge.id
    else:
        values = _payment_values(payment, PaymentStatus.PENDING)

    await _update(db, values, payment.invoice_id)
    return await _refreshed(db, payment.invoice_id)


async def paypal_charge_success(db: AsyncSession, transaction_id: Any, invoice_id: Any) -> None:
    """Mark the invoice paid for a PayPal notification.

    Exactly one invoice must match; zero or several matches are reported the
    same way.
    """
    if transaction_id is None or not str(transaction_id).strip():
        raise ValidationError("transaction_id is required")
    values = {
        "payment_status": PaymentStatus.PAID.value,
        "transaction_id": str(transaction_id),
    }
    affected = await invoice_store.update_invoice(db, values, invoice_id)
    event_logger.log_new_paypal_update(invoice_id, transaction_id)
    if affected != 1:
        event_logger.log_new_failed_paypal_update(invoice_id, transaction_id, affected)
        raise PaypalUpdateFailed(invoice_id, transaction_id, affected)
    logger.info("PayPal transaction %s reconciled with invoice %s", transaction_id, invoice_id)


__all__ = [
    "InvoicePayment",
    "NewInvoice",
    "build_reference",
    "create_empty_invoice",
    "create_invoice",
    "pay_for_invoice",
    "paypal_charge_success",
]
