"""Application settings module.

Centralized configuration from environment variables with sane defaults.
Stripe keys are empty by default so imports never fail; charging a card
without a secret key is rejected by the gateway.
"""
from __future__ import annotations

from functools import lru_cache
import os

from pydantic import BaseModel


class Settings(BaseModel):
    # Payment gateway
    STRIPE_SECRET_KEY: str = ""
    STRIPE_PUBLISHABLE_KEY: str = ""
    STRIPE_CURRENCY: str = "aud"
    STRIPE_CHARGE_DESCRIPTION: str = "Membership payment"

    # Observability
    LOG_LEVEL: str = "INFO"
    ENABLE_METRICS: bool = True

    @classmethod
    def load(cls) -> "Settings":
        """Load settings from environment with type coercion and defaults."""
        def _get_bool(name: str, default: bool) -> bool:
            raw = os.getenv(name)
            if raw is None:
                return default
            return raw.lower() in {"1", "true", "yes", "on"}

        return cls(
            STRIPE_SECRET_KEY=os.getenv("STRIPE_SECRET_KEY", ""),
            STRIPE_PUBLISHABLE_KEY=os.getenv("STRIPE_PUBLISHABLE_KEY", ""),
            STRIPE_CURRENCY=os.getenv("STRIPE_CURRENCY", "aud").lower(),
            STRIPE_CHARGE_DESCRIPTION=os.getenv(
                "STRIPE_CHARGE_DESCRIPTION", "Membership payment"),
            LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),
            ENABLE_METRICS=_get_bool("ENABLE_METRICS", True),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached Settings instance (singleton pattern)."""
    return Settings.load()


__all__ = ["Settings", "get_settings"]
