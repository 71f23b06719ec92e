"""Stripe payment integration service."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import stripe

from ..domain.errors import InvalidInputError, UnexpectedError

logger = logging.getLogger(__name__)

# Whole currency units are charged in the smallest unit (cents).
MINOR_UNITS_PER_UNIT = 100


class StripeService:
    """Creates Stripe PaymentIntents for funding contributions."""

    def __init__(self, secret_key: Optional[str]) -> None:
        self._secret_key = secret_key.strip() if secret_key else None
        if self._secret_key:
            stripe.api_key = self._secret_key
        else:
            logger.warning("STRIPE_SECRET_KEY not set; payment intents are disabled")

    @property
    def is_configured(self) -> bool:
        return bool(self._secret_key)

    def create_payment_intent(
        self,
        amount: int,
        currency: str,
        *,
        receipt_email: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Create a card PaymentIntent and return its client-side secret."""
        if not self._secret_key:
            raise UnexpectedError("Payments are not configured")

        params: Dict[str, Any] = {
            "amount": amount * MINOR_UNITS_PER_UNIT,
            "currency": currency,
            "payment_method_types": ["card"],
        }
        if receipt_email:
            params["receipt_email"] = receipt_email

        try:
            intent = stripe.PaymentIntent.create(**params)
        except stripe.InvalidRequestError as exc:
            raise InvalidInputError(f"Invalid payment request: {exc.user_message or str(exc)}") from exc
        except stripe.AuthenticationError as exc:
            logger.error("Stripe rejected the configured API key")
            raise UnexpectedError("Payment provider authentication failed") from exc
        except stripe.StripeError as exc:
            logger.error("Failed to create payment intent: %s", str(exc))
            raise UnexpectedError("Failed to create payment intent") from exc

        logger.info("Payment intent %s created for %s %s", intent.id, amount, currency)
        return {
            "client_secret": intent.client_secret,
            "payment_intent_id": intent.id,
        }
