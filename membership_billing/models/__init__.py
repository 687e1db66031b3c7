"""Models package marker.

Exposes Base and the invoice model for simplified imports.
"""
from .database import Base, Invoice, PaymentStatus, PaymentType  # noqa: F401
