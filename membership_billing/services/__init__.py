"""Service layer package."""

__all__ = [
    "event_logger",
    "invoice_service",
    "invoice_store",
    "stripe_handler",
]
