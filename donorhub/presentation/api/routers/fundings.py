"""Funding records and Stripe payment intents."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, status

from ....application.services.funding_service import FundingService
from ....core.dependencies import get_funding_service
from ....domain.models import Identity
from ...api.dependencies import optional_identity, require_identity
from ...api.schemas.funding_schemas import FundingCreateRequest, PaymentIntentRequest
from ...api.serializers import serialize_funding

router = APIRouter(prefix="/fundings", tags=["Fundings"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_funding(
    payload: FundingCreateRequest,
    identity: Optional[Identity] = Depends(optional_identity),
    service: FundingService = Depends(get_funding_service),
) -> Dict[str, Any]:
    funding = service.record(
        payload.amount,
        identity=identity,
        donor_name=payload.donor_name,
        donor_email=payload.donor_email,
        transaction_id=payload.transaction_id,
    )
    return {"insertedId": funding.id, "funding": serialize_funding(funding)}


@router.get("")
def list_fundings(
    _: Identity = Depends(require_identity),
    service: FundingService = Depends(get_funding_service),
) -> Dict[str, Any]:
    summary = service.summary()
    return {
        "fundings": [serialize_funding(item) for item in summary.items],
        "totalAmount": summary.total_amount,
    }


@router.post("/payment-intent")
def create_payment_intent(
    payload: PaymentIntentRequest,
    identity: Optional[Identity] = Depends(optional_identity),
    service: FundingService = Depends(get_funding_service),
) -> Dict[str, Any]:
    """Hand the contribution to Stripe and return the client confirmation secret."""
    intent = service.create_payment_intent(payload.amount, identity=identity)
    return {"clientSecret": intent["client_secret"], "paymentIntentId": intent.get("payment_intent_id")}
