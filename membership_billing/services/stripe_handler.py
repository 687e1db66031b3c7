"""Stripe payment gateway client.

The Stripe SDK is synchronous, so charges run in a worker thread to keep
the event loop free.
"""
from __future__ import annotations

import asyncio
import logging

import stripe

from ..config.settings import get_settings
from ..utils.errors import ChargeFailed

logger = logging.getLogger(__name__)


async def charge_card(stripe_token: str, amount_in_cents: int) -> stripe.Charge:
    """Charge ``amount_in_cents`` against the card behind ``stripe_token``.

    Raises ChargeFailed (chained from the Stripe error) when the gateway
    rejects the charge.
    """
    settings = get_settings()
    try:
        charge = await asyncio.to_thread(
            stripe.Charge.create,
            amount=amount_in_cents,
            currency=settings.STRIPE_CURRENCY,
            source=stripe_token,
            description=settings.STRIPE_CHARGE_DESCRIPTION,
            api_key=settings.STRIPE_SECRET_KEY,
        )
    except stripe.StripeError as exc:
        message = exc.user_message or str(exc)
        logger.warning("Stripe charge rejected: %s", message)
        raise ChargeFailed(stripe_token, message) from exc
    logger.info("Stripe charge %s created for %s cents", charge.id, amount_in_cents)
    return charge


def get_public_key() -> str:
    """Publishable key handed to the browser to tokenize cards."""
    return get_settings().STRIPE_PUBLISHABLE_KEY
