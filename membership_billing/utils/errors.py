"""Domain exceptions and the standardized error payload helper."""
from __future__ import annotations
from typing import Any, Dict
import time

ERROR_CODES = {
    "validation": "VALIDATION_ERROR",
    "invoice_not_found": "INVOICE_NOT_FOUND",
    "charge_failed": "CHARGE_FAILED",
    "paypal_update_failed": "PAYPAL_UPDATE_FAILED",
}


def error_payload(code: str, message: str, details: Any | None = None) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "status": "error",
        "error": {
            "code": code,
            "message": message,
        },
        "timestamp": time.time(),
    }
    if details is not None:
        payload["error"]["details"] = details
    return payload


class DomainError(Exception):
    """Base domain error storing standardized fields."""

    def __init__(self, code: str, message: str, details: Any | None = None):  # noqa: D401
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details

    def to_payload(self) -> Dict[str, Any]:
        return error_payload(self.code, self.message, details=self.details)


class ValidationError(DomainError):
    """Raised when incoming payload fails basic validation rules."""

    def __init__(self, message: str, details: Any | None = None):
        super().__init__(ERROR_CODES["validation"], message, details)


class InvoiceNotFound(DomainError):
    """Raised when an invoice cannot be found."""

    def __init__(self, invoice_id: int):
        super().__init__(ERROR_CODES["invoice_not_found"],
                         f"Invoice {invoice_id} not found", {"invoice_id": invoice_id})
        self.invoice_id = invoice_id


class ChargeFailed(DomainError):
    """Raised when the payment gateway rejects a card charge."""

    def __init__(self, stripe_token: str, message: str):
        super().__init__(ERROR_CODES["charge_failed"], message)
        self.stripe_token = stripe_token


class PaypalUpdateFailed(DomainError):
    """Raised when a PayPal notification does not match exactly one invoice."""

    def __init__(self, invoice_id: Any, transaction_id: Any, affected: int):
        super().__init__(
            ERROR_CODES["paypal_update_failed"],
            f"PayPal transaction {transaction_id} matched {affected} invoices for id {invoice_id}",
            {"invoice_id": invoice_id, "transaction_id": transaction_id, "affected": affected},
        )
        self.invoice_id = invoice_id
        self.transaction_id = transaction_id
        self.affected = affected


__all__ = [
    "ERROR_CODES",
    "error_payload",
    "DomainError",
    "ValidationError",
    "InvoiceNotFound",
    "ChargeFailed",
    "PaypalUpdateFailed",
]
