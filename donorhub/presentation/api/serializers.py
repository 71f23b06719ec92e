from datetime import datetime
from typing import Any, Dict, Optional

from ...domain.models import DonationRequest, Funding, User


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.replace(microsecond=0).isoformat() if value else None


def serialize_user(user: User) -> Dict[str, Any]:
    return {
        "_id": user.id,
        "email": user.email,
        "name": user.name,
        "role": user.role,
        "status": user.status,
        "bloodGroup": user.blood_group,
        "district": user.district,
        "upazila": user.upazila,
        "photoURL": user.photo_url,
        "createdAt": _iso(user.created_at),
    }


def serialize_request(request: DonationRequest) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "_id": request.id,
        "requesterEmail": request.requester_email,
        "requesterName": request.requester_name,
        "recipientName": request.recipient_name,
        "hospitalName": request.hospital_name,
        "fullAddress": request.full_address,
        "bloodGroup": request.blood_group,
        "district": request.district,
        "upazila": request.upazila,
        "donationDate": request.donation_date,
        "donationTime": request.donation_time,
        "requestMessage": request.request_message,
        "status": request.status,
        "createdAt": _iso(request.created_at),
        "updatedAt": _iso(request.updated_at),
    }
    # Donor fields only exist once a donor has claimed the request.
    if request.donor_email:
        payload["donorName"] = request.donor_name
        payload["donorEmail"] = request.donor_email
        payload["donatedAt"] = _iso(request.donated_at)
    return payload


def serialize_funding(funding: Funding) -> Dict[str, Any]:
    return {
        "_id": funding.id,
        "amount": funding.amount,
        "donorName": funding.donor_name,
        "donorEmail": funding.donor_email,
        "transactionId": funding.transaction_id,
        "createdAt": _iso(funding.created_at),
    }
