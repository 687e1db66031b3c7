"""Prometheus counters for invoice events.

Each event logged by ``services.event_logger`` bumps
``invoice_events_total{event="..."}`` so charge failures and PayPal
mismatches can be alerted on without parsing logs.
"""
from prometheus_client import Counter

from .settings import get_settings


invoice_event_counter = Counter(
    "invoice_events_total",
    "Invoice lifecycle events by kind",
    ["event"],
)


def record_invoice_event(event: str) -> None:
    if not get_settings().ENABLE_METRICS:
        return
    invoice_event_counter.labels(event).inc()


__all__ = ["invoice_event_counter", "record_invoice_event"]
