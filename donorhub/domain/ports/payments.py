from __future__ import annotations

from typing import Any, Dict, Optional, Protocol


class PaymentGateway(Protocol):
    """Creates client-side payment confirmations with the payment provider."""

    def create_payment_intent(
        self,
        amount: int,
        currency: str,
        *,
        receipt_email: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Return at least ``client_secret`` and ``payment_intent_id``."""
        ...
