from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, status

from ....application.services.auth_guard import AuthGuard
from ....application.services.donation_request_service import DonationRequestService
from ....application.services.listing import DEFAULT_LIMIT, MAX_LIMIT, PageRequest
from ....core.dependencies import get_auth_guard, get_donation_request_service
from ....domain.models import Identity
from ...api.dependencies import require_identity, require_listing_access
from ...api.schemas.donation_request_schemas import (
    DonationClaimPayload,
    DonationRequestCreatePayload,
    DonationRequestUpdatePayload,
    DonationStatusPayload,
)
from ...api.serializers import serialize_request

router = APIRouter(prefix="/donation-requests", tags=["Donation Requests"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_donation_request(
    payload: DonationRequestCreatePayload,
    identity: Identity = Depends(require_identity),
    service: DonationRequestService = Depends(get_donation_request_service),
) -> Dict[str, Any]:
    request = service.create(identity, payload.model_dump(by_alias=True, exclude_none=True))
    return {"insertedId": request.id, "request": serialize_request(request)}


@router.get("")
def list_donation_requests(
    status_filter: Optional[str] = Query(None, alias="status"),
    blood_group: Optional[str] = Query(None, alias="bloodGroup"),
    district: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    _: Optional[Identity] = Depends(require_listing_access),
    service: DonationRequestService = Depends(get_donation_request_service),
) -> Dict[str, Any]:
    result = service.list_requests(
        PageRequest(page=page, limit=limit),
        status=status_filter,
        blood_group=blood_group,
        district=district,
    )
    return {
        "requests": [serialize_request(item) for item in result.items],
        "pagination": result.pagination.to_dict(),
    }


@router.get("/pending")
def list_pending_requests(
    blood_group: Optional[str] = Query(None, alias="bloodGroup"),
    district: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    service: DonationRequestService = Depends(get_donation_request_service),
) -> Dict[str, Any]:
    result = service.list_pending(
        PageRequest(page=page, limit=limit),
        blood_group=blood_group,
        district=district,
    )
    return {
        "requests": [serialize_request(item) for item in result.items],
        "pagination": result.pagination.to_dict(),
    }


@router.get("/mine")
def list_my_requests(
    limit: Optional[int] = Query(None, ge=1, le=MAX_LIMIT),
    identity: Identity = Depends(require_identity),
    service: DonationRequestService = Depends(get_donation_request_service),
) -> Dict[str, Any]:
    items = service.list_for_requester(identity, limit=limit)
    return {"requests": [serialize_request(item) for item in items], "count": len(items)}


@router.get("/{request_id}")
def get_donation_request(
    request_id: str,
    _: Identity = Depends(require_identity),
    service: DonationRequestService = Depends(get_donation_request_service),
) -> Dict[str, Any]:
    return serialize_request(service.get(request_id))


@router.patch("/{request_id}")
def edit_donation_request(
    request_id: str,
    payload: DonationRequestUpdatePayload,
    identity: Identity = Depends(require_identity),
    service: DonationRequestService = Depends(get_donation_request_service),
) -> Dict[str, Any]:
    request = service.edit(request_id, identity, payload.model_dump(by_alias=True, exclude_none=True))
    return {"message": "Donation request updated", "request": serialize_request(request)}


@router.patch("/{request_id}/donate")
def claim_donation_request(
    request_id: str,
    payload: Optional[DonationClaimPayload] = None,
    identity: Identity = Depends(require_identity),
    service: DonationRequestService = Depends(get_donation_request_service),
) -> Dict[str, Any]:
    donor_name = payload.donor_name if payload else None
    request = service.claim(request_id, identity, donor_name)
    return {"message": "Donation confirmed", "request": serialize_request(request)}


@router.patch("/{request_id}/status")
def close_donation_request(
    request_id: str,
    payload: DonationStatusPayload,
    identity: Identity = Depends(require_identity),
    service: DonationRequestService = Depends(get_donation_request_service),
) -> Dict[str, Any]:
    request = service.close(request_id, identity, payload.status.strip().lower())
    return {"message": f"Donation request marked {request.status}", "request": serialize_request(request)}


@router.delete("/{request_id}")
def delete_donation_request(
    request_id: str,
    identity: Identity = Depends(require_identity),
    auth_guard: AuthGuard = Depends(get_auth_guard),
    service: DonationRequestService = Depends(get_donation_request_service),
) -> Dict[str, Any]:
    service.delete(request_id, identity, is_admin=auth_guard.is_admin(identity))
    return {"message": "Donation request deleted", "deletedId": request_id}
