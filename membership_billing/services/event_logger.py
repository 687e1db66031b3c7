"""Invoice lifecycle event log.

One function per event kind. Each writes a structured log entry and bumps
the matching Prometheus counter; none of them raise.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

import structlog

from ..config.observability import record_invoice_event
from ..models.database import Invoice

logger = structlog.get_logger("membership_billing.events")


def _invoice_fields(invoice: Invoice) -> Dict[str, Any]:
    return {
        "invoice_id": invoice.id,
        "member_email": invoice.member_email,
        "reference": invoice.reference,
        "payment_type": invoice.payment_type,
        "payment_status": invoice.payment_status,
        "total_amount_in_cents": invoice.total_amount_in_cents,
    }


def log_new_invoice_event(invoice: Invoice) -> None:
    record_invoice_event("new_invoice")
    logger.info("new_invoice", **_invoice_fields(invoice))


def log_update_invoice_event(invoice_id: int, values: Dict[str, Any]) -> None:
    record_invoice_event("update_invoice")
    logger.info("update_invoice", invoice_id=invoice_id, values=values)


def log_create_empty_invoice_event(
    member_email: str,
    invoice: Optional[Invoice] = None,
    error: Optional[BaseException] = None,
) -> None:
    if error is not None:
        record_invoice_event("create_empty_invoice_failed")
        logger.error("create_empty_invoice_failed",
                     member_email=member_email, error=str(error))
        return
    record_invoice_event("create_empty_invoice")
    logger.info("create_empty_invoice", member_email=member_email,
                invoice_id=invoice.id if invoice is not None else None)


def log_new_charge_event(stripe_token: str) -> None:
    record_invoice_event("new_charge")
    logger.info("new_charge", stripe_token=stripe_token)


def log_new_failed_charge(stripe_token: str, error: BaseException) -> None:
    record_invoice_event("failed_charge")
    logger.error("failed_charge", stripe_token=stripe_token, error=str(error))


def log_new_paypal_update(invoice_id: Any, transaction_id: Any) -> None:
    record_invoice_event("paypal_update")
    logger.info("paypal_update", invoice_id=invoice_id,
                transaction_id=transaction_id)


def log_new_failed_paypal_update(invoice_id: Any, transaction_id: Any, affected: int) -> None:
    record_invoice_event("failed_paypal_update")
    logger.error("failed_paypal_update", invoice_id=invoice_id,
                 transaction_id=transaction_id, affected=affected)


__all__ = [
    "log_new_invoice_event",
    "log_update_invoice_event",
    "log_create_empty_invoice_event",
    "log_new_charge_event",
    "log_new_failed_charge",
    "log_new_paypal_update",
    "log_new_failed_paypal_update",
]
