"""Membership billing: invoice creation, payment and PayPal reconciliation."""

__version__ = "0.1.0"
