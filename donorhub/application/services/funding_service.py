"""Funding records and the payment-intent handoff to the payment provider."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ...domain.errors import InvalidInputError
from ...domain.models import Funding, Identity
from ...domain.ports.payments import PaymentGateway
from ...domain.ports.persistence import FundingRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FundingSummary:
    items: List[Funding]
    total_amount: int


class FundingService:
    """Records contributions; payment verification stays with the provider."""

    def __init__(
        self,
        fundings: FundingRepository,
        payments: PaymentGateway,
        *,
        currency: str = "usd",
        min_amount: int = 1,
    ) -> None:
        self._fundings = fundings
        self._payments = payments
        self._currency = currency
        self._min_amount = min_amount

    def record(
        self,
        amount: int,
        *,
        identity: Optional[Identity] = None,
        donor_name: Optional[str] = None,
        donor_email: Optional[str] = None,
        transaction_id: Optional[str] = None,
    ) -> Funding:
        _require_positive(amount)
        if identity is not None:
            email = identity.email
            name = identity.name or donor_name
        else:
            email = (donor_email or "").strip().lower()
            name = donor_name
            if not email:
                raise InvalidInputError("donorEmail is required")

        funding = self._fundings.create_funding(
            {
                "amount": amount,
                "donorName": name,
                "donorEmail": email,
                "transactionId": transaction_id or None,
                "createdAt": datetime.now(timezone.utc),
            }
        )
        logger.info("Funding %s of %s recorded for %s", funding.id, amount, email)
        return funding

    def summary(self) -> FundingSummary:
        return FundingSummary(
            items=self._fundings.list_fundings(),
            total_amount=self._fundings.total_funding_amount(),
        )

    def total_amount(self) -> int:
        return self._fundings.total_funding_amount()

    def create_payment_intent(self, amount: int, *, identity: Optional[Identity] = None) -> Dict[str, Any]:
        _require_positive(amount)
        if amount < self._min_amount:
            raise InvalidInputError(f"Minimum contribution is {self._min_amount} {self._currency.upper()}")
        return self._payments.create_payment_intent(
            amount,
            self._currency,
            receipt_email=identity.email if identity else None,
        )


def _require_positive(amount: Any) -> None:
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise InvalidInputError("amount must be a positive integer")
